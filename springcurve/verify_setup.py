#!/usr/bin/env python3
"""
SPRINGCURVE - SETUP VERIFICATION SCRIPT
=======================================

Quick verification that all components are working correctly.

Usage:
    python -m springcurve.verify_setup
"""
import sys
import math
from pathlib import Path

ROOT = Path(__file__).resolve().parent

if str(ROOT.parent) not in sys.path:
    sys.path.insert(0, str(ROOT.parent))


def print_header(text: str):
    """Print formatted section header."""
    print("\n" + "="*70)
    print(f" {text}")
    print("="*70)


def print_success(text: str):
    """Print success message."""
    print(f"✅ {text}")


def print_error(text: str):
    """Print error message."""
    print(f"❌ {text}")


def print_info(text: str):
    """Print info message."""
    print(f"ℹ️  {text}")


def verify_imports() -> bool:
    """Verify all required imports work."""
    print_header("STEP 1: Verifying Dependencies")

    required_packages = [
        ("fastapi", "FastAPI web framework"),
        ("uvicorn", "ASGI server"),
        ("pydantic", "Data validation"),
        ("yaml", "YAML config parser"),
    ]

    all_ok = True
    for package, description in required_packages:
        try:
            __import__(package)
            print_success(f"{package:15s} - {description}")
        except ImportError:
            print_error(f"{package:15s} - NOT FOUND")
            all_ok = False

    if not all_ok:
        print_error("\nMissing dependencies! Run: pip install -e .")

    return all_ok


def verify_file_structure() -> bool:
    """Verify all required files exist."""
    print_header("STEP 2: Verifying File Structure")

    required_files = [
        "config.yaml",
        "core/config.py",
        "core/logging_config.py",
        "core/physics/vector.py",
        "core/physics/bezier.py",
        "core/physics/spring.py",
        "services/control_points.py",
        "services/loop.py",
        "services/input_router.py",
        "services/scene.py",
        "app/main.py",
        "app/models.py",
        "app/api/scene.py",
        "app/api/inputs.py",
    ]

    all_ok = True
    for file_path in required_files:
        path = ROOT / file_path
        if path.exists():
            size_kb = path.stat().st_size / 1024
            print_success(f"{file_path:30s} ({size_kb:.1f} KB)")
        else:
            print_error(f"{file_path:30s} MISSING")
            all_ok = False

    return all_ok


def verify_python_imports() -> bool:
    """Verify Python modules can be imported."""
    print_header("STEP 3: Verifying Python Modules")

    modules_to_test = [
        ("springcurve.core.physics", "Bezier + spring physics"),
        ("springcurve.core.config", "Settings loader"),
        ("springcurve.services", "Control points, loop, input, scene"),
        ("springcurve.app.models", "API models"),
        ("springcurve.app.main", "API application"),
    ]

    all_ok = True
    for module_name, description in modules_to_test:
        try:
            __import__(module_name)
            print_success(f"{module_name:30s} - {description}")
        except Exception as e:
            print_error(f"{module_name:30s} - FAILED: {e}")
            all_ok = False

    return all_ok


def verify_config() -> bool:
    """Verify configuration file."""
    print_header("STEP 4: Verifying Configuration")

    try:
        from springcurve.core.config import load_settings
        settings = load_settings(ROOT / "config.yaml")
    except Exception as e:
        print_error(f"Config error: {e}")
        return False

    print_success("config.yaml is valid")
    print_info(f"  Server: {settings.server.host}:{settings.server.port}")
    print_info(f"  Spring: k={settings.physics.stiffness} c={settings.physics.damping} "
               f"(ζ={settings.physics.spring_config().damping_ratio:.2f})")
    print_info(f"  Curve: {settings.curve.steps} steps, tangent every {settings.curve.tangent_interval}")
    print_info(f"  Frame rate: {settings.loop.fps:.0f} fps")

    return True


def verify_physics() -> bool:
    """Run the spring and curve through a short simulation."""
    print_header("STEP 5: Verifying Physics")

    try:
        from springcurve.core.physics import Point2, SpringPoint, get_point, is_finite
        from springcurve.services import ManualFrameSource, CurveScene, Mode, ControlPointId
        from springcurve.core.config import load_settings
    except Exception as e:
        print_error(f"Import error: {e}")
        return False

    all_ok = True

    p0, p1, p2, p3 = Point2(100, 300), Point2(150, 250), Point2(450, 350), Point2(500, 300)
    if get_point(0.0, p0, p1, p2, p3) == p0 and get_point(1.0, p0, p1, p2, p3) == p3:
        print_success("Curve endpoints exact")
    else:
        print_error("Curve endpoints drift")
        all_ok = False

    spring = SpringPoint(Point2(0, 0))
    spring.set_target(Point2(1e6, -1e6))
    spring.update(1000.0)
    if is_finite(spring.position) and is_finite(spring.velocity):
        print_success("Large dt stays finite")
    else:
        print_error("Large dt diverged")
        all_ok = False

    source = ManualFrameSource()
    scene = CurveScene(load_settings(ROOT / "config.yaml"), source, mode=Mode.AUTO)
    target = Point2(scene.layout.width / 2, scene.layout.height / 4)
    scene.model.set_target(ControlPointId.P1, target)

    for i in range(600):
        source.emit(i / 60)

    error = math.dist(scene.model.p1.to_tuple(), target.to_tuple())
    if error < 0.5:
        print_success(f"Spring settled after 10s simulated (error {error:.2e})")
    else:
        print_error(f"Spring did not settle (error {error:.2f})")
        all_ok = False

    print_info(f"  Rendered {scene.renders} frames")

    return all_ok


def main() -> int:
    """Run all verification checks."""
    print("\n")
    print("╔" + "="*68 + "╗")
    print("║" + " "*19 + "SPRINGCURVE - SETUP VERIFICATION" + " "*17 + "║")
    print("╚" + "="*68 + "╝")

    results = []

    # Run all checks
    results.append(("Dependencies", verify_imports()))
    results.append(("File Structure", verify_file_structure()))
    results.append(("Python Modules", verify_python_imports()))
    results.append(("Configuration", verify_config()))
    results.append(("Physics", verify_physics()))

    # Summary
    print_header("VERIFICATION SUMMARY")

    all_passed = all(result for _, result in results)

    for check_name, passed in results:
        status = "✅ PASS" if passed else "❌ FAIL"
        print(f"  {check_name:20s} {status}")

    print("\n" + "-"*70)

    if all_passed:
        print_success("All checks passed! ✨")
        print("\nNext steps:")
        print("  1. Start server: uvicorn springcurve.app.main:app --port 8000")
        print("  2. Check health: curl http://localhost:8000/health")
        print("  3. Read API docs: http://localhost:8000/docs")
        return 0
    else:
        print_error("Some checks failed!")
        print("\nTroubleshooting:")
        print("  • Missing dependencies: pip install -e .")
        print("  • Import errors: Ensure you run from the project root (python -m springcurve.verify_setup)")
        return 1


if __name__ == "__main__":
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        print("\n\nVerification interrupted.")
        sys.exit(1)
