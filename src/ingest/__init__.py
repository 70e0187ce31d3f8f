"""CSV record ingestion.

This module reads payload rows from CSV input and drives each record
through decode, encode, or fallback dump.
"""
