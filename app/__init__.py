"""
Asset Warehouse API

A REST backend for a catalog of uploadable 3D assets with user accounts,
session-cookie authentication, search and popularity ranking.
"""

__version__ = "1.0.0"
