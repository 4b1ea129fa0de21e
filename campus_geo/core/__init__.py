"""Core utilities and shared infrastructure.

- config: Configuration loading and validation
- constants: Named constants (geometry types, WGS 84 bounds, defaults)
- exceptions: Custom exception hierarchy
- ingress: Normalisation of raw upload payloads
"""
