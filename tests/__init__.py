"""
Tests for Coral Forge

This package contains tests for:
- Seeded generation (heuristic and flow-conserving generators)
- Anastomosis, field rasterization and junction blending
- Isosurface extraction and mesh postprocessing
- Policies, specs, reports and the command line
"""
