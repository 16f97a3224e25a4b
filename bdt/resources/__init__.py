from .lookup import ResourceLookup, canonical_json, JSON_PREFIX, IP_PREFIX

__all__ = ["ResourceLookup", "canonical_json", "JSON_PREFIX", "IP_PREFIX"]
