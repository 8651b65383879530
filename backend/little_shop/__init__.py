"""
Little Shop backend: merchants, items and coupons over HTTP
"""
__version__ = "1.0.0"
