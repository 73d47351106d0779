"""
STIG Mapper Test Suite

Test Organization:
- test_core/ - Constants, configuration, logging
- test_xml/ - Schema, escaping, tag stream
- test_io/ - File reading and atomic writes
- test_catalog/ - CCI list parser
- test_checklist/ - CKL parser, serializer, merger
- test_mapping/ - Aggregation and summary
- test_ui/ - Command-line interface
- test_integration/ - End-to-end workflows

Running Tests:
    python -m pytest tests/ -v
    python -m pytest tests/ -v --cov=stig_mapper --cov-report=html
"""
