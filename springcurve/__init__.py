"""
SpringCurve: spring-animated cubic Bezier curve engine.

Subpackages:
- springcurve.core:     physics, configuration, logging setup
- springcurve.services: control points, loop, input router, scene
- springcurve.app:      FastAPI application
"""

__version__ = "1.0.0"
