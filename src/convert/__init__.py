"""Per-record image conversion.

This module decodes base64 payloads, re-encodes images by routing
policy, and dumps undecodable payloads for manual inspection.
"""
