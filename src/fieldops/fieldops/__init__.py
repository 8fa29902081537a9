"""Field operations package.

This package is organized by feature modules (attendance, reports, locations, ...)
with a thin Flask controller layer and service/repository layers.
"""
