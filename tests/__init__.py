"""
Tests for focus-crop.

Test suite covers:
- Pure geometry (size parsing, scale planning, crop planning, naming)
- Configuration loading and validation
- Orchestration with a mock imaging backend
- End-to-end cropping of generated JPEG and PNG files with Pillow
- HTTP API and command line
"""
