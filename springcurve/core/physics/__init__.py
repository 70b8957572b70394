"""
Physics engine for the animated Bezier curve.

Exports:
- Point2: Immutable 2D point
- get_point / get_tangent: Cubic Bezier evaluation
- CubicBezier: Curve value type with samplers
- SpringPoint: Damped-spring control point
"""
from .vector import (
    Point2,
    ZERO,
    add,
    sub,
    scale,
    magnitude,
    distance,
    unit,
    is_finite
)
from .bezier import (
    get_point,
    get_tangent,
    CubicBezier,
    TangentMarker,
    CursorProjection
)
from .spring import (
    SpringPoint,
    SpringConfig,
    MAX_DT,
    clamp_dt
)

__all__ = [
    'Point2',
    'ZERO',
    'add',
    'sub',
    'scale',
    'magnitude',
    'distance',
    'unit',
    'is_finite',
    'get_point',
    'get_tangent',
    'CubicBezier',
    'TangentMarker',
    'CursorProjection',
    'SpringPoint',
    'SpringConfig',
    'MAX_DT',
    'clamp_dt'
]
