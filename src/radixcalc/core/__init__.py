"""
Core modules for radixcalc

Содержит:
- errors: таксономия ошибок вычислителя
- math: численное ядро (BigNum, Complex, трансцендентные функции, форматтер)
- domain: состояние калькулятора и его снимок
- contracts: валидация снимка по JSON Schema
"""
