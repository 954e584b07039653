"""Byte-order reader, header schemas and the structural decoder."""
