#!/usr/bin/env python3
"""
Quick check script to verify installation.

Run this after setting up the environment to check everything works.
"""

import sys
from pathlib import Path

print("="*70)
print("MOTT_MC Installation Check")
print("="*70)

# Check 1: Import packages
print("\n1. Checking imports...")
try:
    import numpy as np
    print("   ✓ NumPy:", np.__version__)
except ImportError as e:
    print(f"   ✗ NumPy failed: {e}")
    sys.exit(1)

try:
    import scipy
    print("   ✓ SciPy:", scipy.__version__)
except ImportError as e:
    print(f"   ✗ SciPy failed: {e}")
    sys.exit(1)

try:
    import numba
    print("   ✓ Numba:", numba.__version__)
except ImportError as e:
    print(f"   ✗ Numba failed: {e}")
    sys.exit(1)

try:
    import yaml
    print("   ✓ PyYAML:", yaml.__version__)
except ImportError as e:
    print(f"   ✗ PyYAML failed: {e}")
    sys.exit(1)

# Check 2: Import mott_mc
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

print("\n2. Checking mott_mc imports...")
try:
    from mott_mc import ScreeningMottCrossSection
    from mott_mc.core.constants import barn
    print("   ✓ ScreeningMottCrossSection imported")
except ImportError as e:
    print(f"   ✗ Failed: {e}")
    sys.exit(1)

# Check 3: Packaged data
print("\n3. Checking packaged data...")
from mott_mc.physics.angular_grid import DEFAULT_GRID_FILE, load_angular_grid

if DEFAULT_GRID_FILE.exists():
    grid = load_angular_grid()
    print(f"   ✓ Found: {DEFAULT_GRID_FILE.name} ({grid.dim} points)")
else:
    print(f"   ✗ Missing: {DEFAULT_GRID_FILE}")
    sys.exit(1)

# Check 4: Cross-section (also compiles the Numba kernels)
print("\n4. Checking cross-section calculation...")
import time

model = ScreeningMottCrossSection(rng=np.random.default_rng(1))
model.initialise('e-')
model.setup_kinematic(1.0, 14)

start = time.time()
sigma = model.nuclear_cross_section()
elapsed = time.time() - start

print(f"   ✓ e- @ 1 MeV on Si: sigma = {sigma / barn:.4g} barn")
print(f"   ✓ First call (with JIT compilation): {elapsed:.2f} s")

if 1e4 < sigma / barn < 1e7:
    print("   ✓ Physics check: PASSED")
else:
    print(f"   ⚠ Physics check: unexpected magnitude")

# Check 5: Sampling
print("\n5. Checking sampling...")
start = time.time()
angles = [model.get_scattering_angle() for _ in range(10000)]
elapsed = time.time() - start
print(f"   ✓ 10000 angles in {elapsed*1000:.1f} ms, median {np.median(angles):.3e} rad")

print("\n" + "="*70)
print("Installation check complete!")
print("="*70)
print("\nNext steps:")
print("  1. Run examples/scripts/mott_angular_distribution.py")
print("  2. Run pytest tests/")
