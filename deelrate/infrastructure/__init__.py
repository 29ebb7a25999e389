"""
Infrastructure layer: adapters for the application ports.
"""
