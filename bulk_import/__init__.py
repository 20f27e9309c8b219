"""
bulk_import package marker.
"""
