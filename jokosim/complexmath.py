# jokosim/complexmath.py
# Complex helpers. Python's complex and numpy's complex128 are already
# immutable values, so these only name the operations the engine uses.
# Every function works on a scalar or elementwise on an ndarray.
import numpy as np

ZERO = 0j
ONE = 1 + 0j
I = 1j

def add(a, b):
    return a + b

def subtract(a, b):
    return a - b

def multiply(a, b):
    return a * b

def scale(a, s: float):
    """Scale by a real factor."""
    return a * float(s)

def conjugate(a):
    return np.conj(a)

def magnitude(a):
    return np.abs(a)

def magnitude_squared(a):
    # re² + im², no square root
    a = np.asarray(a)
    return a.real * a.real + a.imag * a.imag

def from_polar(r: float, theta: float) -> complex:
    """r * e^(i*theta)"""
    return complex(r * np.cos(theta), r * np.sin(theta))

def _fmt(x: float, precision: int) -> str:
    x = round(float(x), precision)
    if x == 0:
        return "0"   # also folds -0.0
    s = f"{x:.{precision}f}".rstrip("0").rstrip(".")
    return s

def complex_to_string(a, precision: int = 4) -> str:
    """
    Short human-readable form, components rounded to `precision` decimals.
    Examples: "1", "0.7071i", "0.5+0.5i", "0.5-0.5i".
    """
    re = _fmt(np.real(a), precision)
    im = _fmt(np.imag(a), precision)
    if im == "0":
        return re
    if re == "0":
        return f"{im}i"
    sign = "-" if im.startswith("-") else "+"
    return f"{re}{sign}{im.lstrip('-')}i"
