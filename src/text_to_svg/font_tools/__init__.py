"""Font access through fontTools.

:author: Shay Hill
:created: 2025-05-31
"""
