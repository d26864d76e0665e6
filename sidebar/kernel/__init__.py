"""
Kernel - identity primitives shared by every API surface.
"""
