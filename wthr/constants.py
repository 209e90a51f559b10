"""Named physical constants and the builtin conversion table.

Constants are exact fractions. The temperature conversions stay exact;
only `dewpoint` drops to floating point, because it needs a logarithm.
"""

from __future__ import annotations

import math
from fractions import Fraction
from typing import Dict, List

from .builtin_function import BuiltinFunction
from .errors import EvalError

KELVIN_OFFSET = Fraction(27315, 100)

PI = Fraction(
    31415926535897932384626433832795028841971693993751058209749445923078164062862089986280348253421170679,
    10 ** 100,
)

CONSTANTS: Dict[str, Fraction] = {
    '_pi_': PI,
    '_kelvin_': KELVIN_OFFSET,
    # Gas constant for dry air, J/(kg K)
    '_rd_': Fraction(28705, 100),
    # Specific heat of air at constant pressure, J/(kg K)
    '_cp_': Fraction(1005),
    # Standard atmospheric pressure, Pa
    '_p0_': Fraction(101325),
    # Latent heat of vaporization of water, J/kg
    '_lv_': Fraction(2260000),
    # Specific heat of water, J/(kg K)
    '_cw_': Fraction(4184),
    '_rho_air_': Fraction(1200),
    '_rho_water_': Fraction(1000),
    # Gravitational acceleration, m/s^2
    '_g_': Fraction(981, 100),
}

# Magnus-type coefficients used by the dew point approximation.
DEW_POINT_A = 17.27
DEW_POINT_B = 237.7


def f_to_c(fahrenheit: Fraction) -> Fraction:
    return (fahrenheit - 32) * 5 / 9


def c_to_f(celsius: Fraction) -> Fraction:
    return celsius * 9 / 5 + 32


def c_to_k(celsius: Fraction) -> Fraction:
    return celsius + KELVIN_OFFSET


def k_to_c(kelvin: Fraction) -> Fraction:
    return kelvin - KELVIN_OFFSET


def dew_point(temperature: Fraction, humidity: Fraction) -> Fraction:
    """Approximate dew point in Celsius from temperature and humidity."""
    hum = float(humidity)
    if hum <= 0:
        raise EvalError(f"dewpoint humidity must be positive, got {hum!r}")
    temp = float(temperature)
    if DEW_POINT_B + temp == 0:
        raise EvalError('dewpoint is undefined at this temperature')
    alpha = (DEW_POINT_A * temp) / (DEW_POINT_B + temp) + math.log(hum)
    if not math.isfinite(alpha) or DEW_POINT_A - alpha == 0:
        raise EvalError('dewpoint is undefined for these inputs')
    result = (DEW_POINT_B * alpha) / (DEW_POINT_A - alpha)
    if not math.isfinite(result):
        raise EvalError('dewpoint is undefined for these inputs')
    return Fraction(result)


def _unary(fn):
    def apply(args: List[Fraction]) -> Fraction:
        return fn(args[0])
    return apply


BUILTINS: Dict[str, BuiltinFunction] = {
    'dewpoint': BuiltinFunction('dewpoint', 2, lambda args: dew_point(args[0], args[1])),
    'ftoc': BuiltinFunction('ftoc', 1, _unary(f_to_c)),
    'ctof': BuiltinFunction('ctof', 1, _unary(c_to_f)),
    'ctok': BuiltinFunction('ctok', 1, _unary(c_to_k)),
    'ktoc': BuiltinFunction('ktoc', 1, _unary(k_to_c)),
    'ftok': BuiltinFunction('ftok', 1, _unary(lambda f: c_to_k(f_to_c(f)))),
    'ktof': BuiltinFunction('ktof', 1, _unary(lambda k: c_to_f(k_to_c(k)))),
}
