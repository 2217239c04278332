import pytest
from wristcalc.engine.evaluator import Operator, evaluate, to_operand, round_significant


@pytest.mark.parametrize("a, b, op, expected", [
    ("2", "3", Operator.ADD, "5"),
    ("2", "3", Operator.SUBTRACT, "-1"),
    ("2.5", "4", Operator.MULTIPLY, "10"),
    ("7", "2", Operator.DIVIDE, "3.5"),
    ("-4", "-4", Operator.MULTIPLY, "16"),
    ("0.", "5", Operator.ADD, "5"),
])
def test_basic_operations(a, b, op, expected):
    assert evaluate(a, b, op) == expected

def test_floating_point_noise_is_rounded_away():
    assert evaluate("0.1", "0.2", Operator.ADD) == "0.3"
    assert evaluate("1.1", "3", Operator.MULTIPLY) == "3.3"

def test_division_by_zero_clamps_to_zero():
    assert evaluate("6", "0", Operator.DIVIDE) == "0"
    assert evaluate("0", "0", Operator.DIVIDE) == "0"
    assert evaluate("6", "-0", Operator.DIVIDE) == "0"

def test_overflow_clamps_to_zero():
    assert evaluate("1e308", "10", Operator.MULTIPLY) == "0"
    assert evaluate("-1e308", "1e308", Operator.SUBTRACT) == "0"

def test_unparsable_operand_clamps_to_zero():
    assert evaluate("-", "2", Operator.ADD) == "0"

def test_result_rounded_to_twelve_significant_digits():
    assert evaluate("1", "3", Operator.DIVIDE) == "0.333333333333"
    assert evaluate("2", "3", Operator.DIVIDE) == "0.666666666667"

def test_negative_zero_renders_as_zero():
    assert evaluate("-5", "0", Operator.MULTIPLY) == "0"

def test_large_results_use_positional_notation_below_1e21():
    assert evaluate("9999999999999999", "1", Operator.ADD) == "10000000000000000"

def test_very_large_and_small_results_use_scientific_notation():
    assert evaluate("1000000000000", "1000000000000", Operator.MULTIPLY) == "1e+24"
    assert evaluate("0.0000001", "1", Operator.MULTIPLY) == "1e-7"
    assert evaluate("0.000000015", "1", Operator.MULTIPLY) == "1.5e-8"

def test_scientific_results_keep_exponent_zeros():
    assert evaluate("15", "1e29", Operator.MULTIPLY) == "1.5e+30"

def test_to_operand_and_round_significant():
    assert round_significant(0.30000000000000004) == 0.3
    assert to_operand(123.0) == "123"
    assert to_operand(0.000001) == "0.000001"
    assert to_operand(-0.0) == "0"

def test_operator_symbols():
    assert [op.symbol for op in Operator] == ["+", "-", "×", "÷"]
