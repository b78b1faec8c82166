"""
Mockapic

Mock HTTP response server: register a canned response, get an identifier
back, and retrieve the response later by that identifier.
"""

__version__ = '1.0.0'
