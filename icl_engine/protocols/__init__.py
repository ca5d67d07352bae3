"""
ICL Engine - Protocol Codecs
"""
