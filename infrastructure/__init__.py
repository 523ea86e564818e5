"""Infrastructure layer for the voicing service.

Modules:
    metrics     Prometheus metrics registry for solver runs.
"""
