"""
StateSnapshot — сериализуемый снимок CalculatorState

Immutable Pydantic модели:
- BigNumRecord: sign, digits (лимбы), point, precision
- ComplexRecord: re, im
- StateSnapshot: schema_version, base, digits, angle_mode, history

Та же форма опубликована как JSON Schema contracts/schema/calculator_state.json.
Ядро определяет только форму снимка; кодирование на диске — забота хранилища.
"""

from dataclasses import replace
from typing import Final

from pydantic import BaseModel, Field, field_validator, model_validator

from radixcalc.core.domain.calculator_state import AngleMode, CalculatorState
from radixcalc.core.math.bignum import BigNum
from radixcalc.core.math.complex_number import Complex
from radixcalc.core.math.limbs import LIMB_BASE

SNAPSHOT_SCHEMA_VERSION: Final[str] = "1"


# =============================================================================
# ЗНАЧЕНИЯ
# =============================================================================


class BigNumRecord(BaseModel):
    """Запись BigNum в каноническом виде (без ведущих и хвостовых нулевых лимбов)."""

    sign: int = Field(..., ge=-1, le=1, description="Знак: -1, 0 или +1")
    digits: list[int] = Field(..., min_length=1, description="Лимбы основания 10**9, старший первым")
    point: int = Field(..., description="Количество целых лимбов")
    precision: int = Field(..., ge=1, description="Достоверная точность в лимбах")

    model_config = {"frozen": True}

    @field_validator("digits")
    @classmethod
    def validate_limb_range(cls, v: list[int]) -> list[int]:
        for limb in v:
            if not 0 <= limb < LIMB_BASE:
                raise ValueError(f"limb {limb} outside [0, {LIMB_BASE})")
        return v

    @model_validator(mode="after")
    def validate_canonical(self) -> "BigNumRecord":
        """Ноль — только sign=0, digits=[0], point=1; у ненулевых нет нулевых краёв."""
        if self.sign == 0:
            if self.digits != [0] or self.point != 1:
                raise ValueError("zero must be encoded as digits=[0], point=1")
        elif self.digits[0] == 0 or self.digits[-1] == 0:
            raise ValueError("non-zero digits must not start or end with a zero limb")
        return self

    @classmethod
    def from_bignum(cls, value: BigNum) -> "BigNumRecord":
        return cls(sign=value.sign, digits=list(value.digits), point=value.point, precision=value.precision)

    def to_bignum(self) -> BigNum:
        value = BigNum.from_limbs(self.sign, self.digits, self.point - len(self.digits))
        return replace(value, precision=self.precision)


class ComplexRecord(BaseModel):
    re: BigNumRecord
    im: BigNumRecord

    model_config = {"frozen": True}

    @classmethod
    def from_complex(cls, value: Complex) -> "ComplexRecord":
        return cls(re=BigNumRecord.from_bignum(value.re), im=BigNumRecord.from_bignum(value.im))

    def to_complex(self) -> Complex:
        return Complex(self.re.to_bignum(), self.im.to_bignum())


# =============================================================================
# СНИМОК СОСТОЯНИЯ
# =============================================================================


class StateSnapshot(BaseModel):
    """
    Снимок {base, digits, angle_mode, history}.

    Восстановление через to_state() даёт эквивалентное состояние с теми же
    номерами записей истории.
    """

    schema_version: str = Field(default=SNAPSHOT_SCHEMA_VERSION, pattern=r"^1$")
    base: int = Field(..., ge=2, le=36, description="Активное основание")
    digits: int = Field(..., ge=1, description="Точность в цифрах основания")
    angle_mode: AngleMode = Field(..., description="Единицы углов")
    history: list[ComplexRecord] = Field(default_factory=list, description="Результаты в порядке вычисления")

    model_config = {"frozen": True}

    @classmethod
    def from_state(cls, state: CalculatorState) -> "StateSnapshot":
        return cls(
            base=state.base,
            digits=state.digits,
            angle_mode=state.angle_mode,
            history=[ComplexRecord.from_complex(value) for value in state.history],
        )

    def to_state(self) -> CalculatorState:
        return CalculatorState(
            base=self.base,
            digits=self.digits,
            angle_mode=self.angle_mode,
            history=[record.to_complex() for record in self.history],
        )


def export_state(state: CalculatorState) -> StateSnapshot:
    return StateSnapshot.from_state(state)


def import_state(snapshot: StateSnapshot) -> CalculatorState:
    return snapshot.to_state()
