"""Staff Directory package.

This package is organized by feature modules (staff, documents) with a thin
Flask controller layer on top of service/repository layers.
"""
