"""
radixcalc — калькулятор комплексных чисел произвольной точности в системах
счисления с основанием 2..36.

Подпакеты:
- core.math: лимбовая арифметика, BigNum, Complex, трансцендентные функции,
  конвертер оснований и форматтер
- core.domain: CalculatorState и сериализуемый снимок состояния
- core.contracts: JSON Schema контракт снимка состояния
- expression: лексер, парсер и вычислитель выражений
- shell: диспетчер команд, хранилище состояния, REPL
"""

__version__ = "0.1.0"
