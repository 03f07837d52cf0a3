"""
Tests for the query and snapshot layer.

Test organization:
- test_registry.py: handle identity across alternates and re-renders
- test_walker.py: children flattening and the flatten helper
- test_serializers.py: to_json / to_tree
- test_search.py: find_all and the find* assertions
- test_printer.py: JSX-like printing and plain-data conversion
"""
