"""API access services: time normalization, throttling, request execution, endpoints."""
