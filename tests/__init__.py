"""
bmfontkit test suite
"""
