"""
notus content engine
"""
