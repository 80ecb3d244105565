"""
EmySound client - register and look up audio tracks on an EmySound server.
"""

__version__ = "0.1.0"
