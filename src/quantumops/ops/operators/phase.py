#   Licensed under the Apache License, Version 2.0 (the "License");
#   you may not use this file except in compliance with the License.
#   You may obtain a copy of the License at
#
#       http://www.apache.org/licenses/LICENSE-2.0
#
#   Unless required by applicable law or agreed to in writing, software
#   distributed under the License is distributed on an "AS IS" BASIS,
#   WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
#   See the License for the specific language governing permissions and
#   limitations under the License.
"""Phase is an exact value type for the factors 0, 1, -1, i and -i."""
import sympy


class PhaseConflict(ArithmeticError):
    pass


# Codes 0 through 3 stand for i**code. Code 4 stands for zero.
_ZERO_CODE = 4
_COMPLEX_VALUES = (1, 1j, -1, -1j, 0)
_LABELS = ('+1', '+i', '-1', '-i', '0')

_MULTIPLICATION_TABLE = tuple(
    tuple(_ZERO_CODE if _ZERO_CODE in (a, b) else (a + b) % 4 for b in range(5)) for a in range(5)
)


class Phase(object):
    """One of the five values 0, +1, -1, +i and -i.

    Multiplication is closed over the set. Addition is only defined when at
    least one operand is zero; it folds contributions of which at most one
    is nonzero, e.g. the single nonzero entry in a row of a Pauli matrix.
    Adding two nonzero phases raises PhaseConflict.

    Instances are interned, so there are exactly five of them::

        Phase.ZERO, Phase.ONE, Phase.I, Phase.MINUS_ONE, Phase.MINUS_I

    Calling ``Phase(value)`` with one of the numbers 0, 1, -1, 1j or -1j
    returns the matching instance.
    """

    __slots__ = ('_code',)

    def __new__(cls, value=1):
        try:
            return _PHASES_BY_VALUE[complex(value)]
        except (KeyError, TypeError, ValueError):
            raise ValueError('A phase must be one of 0, 1, -1, 1j or -1j, not {!r}.'.format(value))

    @classmethod
    def _make(cls, code):
        phase = object.__new__(cls)
        phase._code = code
        return phase

    @classmethod
    def from_value(cls, value):
        return cls(value)

    @classmethod
    def from_power(cls, power):
        """Return i ** power."""
        return _PHASES[power % 4]

    @property
    def power(self):
        """The exponent k with self == i ** k, or None for the zero phase."""
        if self._code == _ZERO_CODE:
            return None
        return self._code

    def __mul__(self, other):
        if not isinstance(other, Phase):
            return NotImplemented
        return _PHASES[_MULTIPLICATION_TABLE[self._code][other._code]]

    def __add__(self, other):
        if not isinstance(other, Phase):
            return NotImplemented
        if other._code == _ZERO_CODE:
            return self
        if self._code == _ZERO_CODE:
            return other
        raise PhaseConflict('Cannot add the nonzero phases {} and {}.'.format(self, other))

    def __neg__(self):
        return self * MINUS_ONE

    def conjugate(self):
        if self._code == _ZERO_CODE:
            return self
        return _PHASES[-self._code % 4]

    def __bool__(self):
        return self._code != _ZERO_CODE

    def __complex__(self):
        return complex(_COMPLEX_VALUES[self._code])

    def __eq__(self, other):
        if isinstance(other, Phase):
            return self is other
        try:
            return complex(self) == other
        except TypeError:
            return NotImplemented

    def __ne__(self, other):
        result = self.__eq__(other)
        if result is NotImplemented:
            return result
        return not result

    def __hash__(self):
        return hash(_COMPLEX_VALUES[self._code])

    def __reduce__(self):
        return Phase, (_COMPLEX_VALUES[self._code],)

    def __str__(self):
        return _LABELS[self._code]

    def __repr__(self):
        return 'Phase({!r})'.format(_COMPLEX_VALUES[self._code])

    def apply(self, coefficient):
        """Multiply a coefficient by this phase without rounding.

        Real phases only negate or keep the coefficient, so integer, Fraction
        and symbolic coefficients keep their type. Imaginary phases multiply
        by 1j, or by sympy.I when the coefficient is a sympy expression.
        """
        code = self._code
        if code == 0:
            return coefficient
        if code == 2:
            return -coefficient
        if code == _ZERO_CODE:
            return coefficient * 0
        unit = sympy.I if isinstance(coefficient, sympy.Basic) else 1j
        if code == 1:
            return coefficient * unit
        return coefficient * -unit


_PHASES = tuple(Phase._make(code) for code in range(5))
_PHASES_BY_VALUE = {complex(_COMPLEX_VALUES[code]): _PHASES[code] for code in range(5)}

ONE, I, MINUS_ONE, MINUS_I, ZERO = _PHASES

Phase.ONE = ONE
Phase.I = I
Phase.MINUS_ONE = MINUS_ONE
Phase.MINUS_I = MINUS_I
Phase.ZERO = ZERO
