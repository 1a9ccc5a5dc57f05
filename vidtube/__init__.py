"""
VidTube - social video platform core
"""
__version__ = "1.0.0"
