# safedotenv Test Suite
"""
Test suite including:
- Unit tests (key derivation, envelope, files, scanner)
- Integration tests (batch processing, command line)
- Security tests (malformed input, wrong keys, per-file isolation)

Run with: pytest
Coverage: coverage run -m pytest && coverage report
"""
