"""
Configuration for the Intersect memory engine.
"""
