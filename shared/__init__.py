"""
Shared Kernel

Value objects and infrastructure pieces shared by every app: money and
range value objects, thousands-separator formatting and the request
logging middleware.
"""
