import pytest

from blanket.ast import Node
from blanket.environment import Context, SymbolTable
from blanket.errors import RTError, format_error
from blanket.interpreter import MAX_EVAL_DEPTH, Interpreter
from blanket.lexer import tokenize
from blanket.parser import parse
from blanket.session import Session


def evaluate(text, session=None):
    session = session or Session()
    result = session.run(text)
    assert result.error is None, result.error.as_string()
    return result.value


def evaluate_error(text, session=None):
    session = session or Session()
    result = session.run(text)
    assert result.error is not None
    return result.error


@pytest.mark.parametrize('text, expected', [
    ('1+2*3', 7),
    ('(1+2)*3', 9),
    ('10-4-3', 3),
    ('7/2', 3.5),
    ('2^3^2', 64),
    ('2^-1', 0.5),
    ('-2^2', -4),
    ('-3', -3),
    ('--3', 3),
    ('+4', 4),
    ('1.5*2', 3),
])
def test_arithmetic(text, expected):
    assert evaluate(text).value == expected


def test_division_renders_integral_results_without_fraction():
    value = evaluate('6/3')
    assert value.value == 2
    assert repr(value) == '2'
    assert repr(evaluate('7/2')) == '3.5'


@pytest.mark.parametrize('text, expected', [
    ('3 > 2', 1),
    ('3 < 2', 0),
    ('2 >= 2', 1),
    ('2 <= 1', 0),
    ('1 == 1.0', 1),
    ('1 != 2', 1),
    ('1 + 1 == 2', 1),
])
def test_comparisons(text, expected):
    assert evaluate(text).value == expected


@pytest.mark.parametrize('text, expected', [
    ('2 and 3', 1),
    ('0 and 1', 0),
    ('1 and 0', 0),
    ('5 or 0', 5),
    ('0 or 7', 7),
    ('0 or 0', 0),
    ('not 0', 1),
    ('not 5', 0),
    ('not 1 == 2', 1),
    ('1 < 2 and 3 > 2', 1),
])
def test_logic(text, expected):
    assert evaluate(text).value == expected


def test_division_by_zero():
    error = evaluate_error('5/0')
    assert isinstance(error, RTError)
    assert error.message == 'Division by zero'
    assert error.pos_start.col == 3
    assert 'Division by zero' in format_error(error)


def test_zero_to_negative_power():
    assert evaluate_error('0^-1').message == 'Division by zero'


def test_complex_power_is_an_error():
    assert evaluate_error('(0-8)^0.5').message == 'Invalid exponentiation'


def test_float_overflow_is_an_error():
    assert evaluate_error('10.0^400').message == 'Numeric overflow'


@pytest.mark.parametrize('text, col', [
    ('10^400 + 0.5', 10),
    ('10^400 - 0.5', 10),
    ('10^400 * 1.5', 10),
    ('10^400 / 7', 10),
    ('0.5 ^ (10^400)', 8),
])
def test_big_integer_mixed_with_floats_overflows(text, col):
    error = evaluate_error(text)
    assert isinstance(error, RTError)
    assert error.message == 'Numeric overflow'
    assert error.pos_start.col == col


def test_big_integers_stay_exact():
    assert evaluate('10^400 + 1 - 10^400').value == 1
    assert evaluate('10^400 > 0.5').value == 1


@pytest.mark.parametrize('text', [
    '2^(10^10)',
    '10^5000',
    '(0-3)^20000',
])
def test_integer_power_size_is_bounded(text):
    assert evaluate_error(text).message == 'Numeric overflow'


def test_integer_product_size_is_bounded():
    session = Session()
    assert evaluate('sclr a = 10^3000', session).value == 10 ** 3000
    error = evaluate_error('a * a', session)
    assert error.message == 'Numeric overflow'
    assert error.pos_start.col == 5


def test_oversized_integer_literal():
    error = evaluate_error('1' + '0' * 3100)
    assert error.message == 'Numeric overflow'
    assert error.pos_start.col == 1


def test_both_operands_are_evaluated():
    assert evaluate_error('0 and 1/0').message == 'Division by zero'
    assert evaluate_error('1 or 1/0').message == 'Division by zero'


def test_left_error_wins():
    error = evaluate_error('y + 1/0')
    assert error.message == 'y is not defined'


def test_unbound_name():
    error = evaluate_error('y+1')
    assert isinstance(error, RTError)
    assert error.message == 'y is not defined'
    assert (error.pos_start.col, error.pos_end.col) == (1, 2)


def test_builtin_constants():
    assert evaluate('true').value == 1
    assert evaluate('false').value == 0
    assert evaluate('null').value == 0


def test_assignment_yields_the_value():
    session = Session()
    assert evaluate('sclr x = 5', session).value == 5
    assert evaluate('x + 1', session).value == 6


def test_chained_assignment():
    session = Session()
    assert evaluate('sclr a = sclr b = 3', session).value == 3
    assert evaluate('a * b', session).value == 9


def test_failed_assignment_does_not_bind():
    session = Session()
    assert evaluate_error('sclr q = 1/0', session).message == 'Division by zero'
    assert evaluate_error('q', session).message == 'q is not defined'


def test_access_copies_the_stored_value():
    session = Session()
    evaluate('sclr x = 4', session)
    stored = session.global_symbol_table.get('x')
    accessed = evaluate('   x', session)
    assert accessed is not stored
    assert accessed.pos_start.col == 4
    assert stored.pos_start.col == 10


def test_values_carry_their_node_span_and_context():
    session = Session()
    value = evaluate('1 + 2', session)
    assert (value.pos_start.col, value.pos_end.col) == (1, 6)
    assert value.context is session.context


@pytest.mark.parametrize('text, expected', [
    ('if 1==1 then 10 else 20', 10),
    ('if 0 then 10 else 20', 20),
    ('if 0 then 10 elif 1==1 then 30 else 20', 30),
    ('if 0 then 10 then 1==1 then 30 else 20', 30),
    ('if 0 then 10 elif 0 then 30 else 20', 20),
    ('1 + if 1 then 2 else 3', 3),
])
def test_conditionals(text, expected):
    assert evaluate(text).value == expected


def test_conditional_short_circuits():
    assert evaluate('if 1 then 2 else 1/0').value == 2
    assert evaluate('if 1 then 1 elif 1/0 then 3').value == 1
    assert evaluate('if 0 then 1/0 else 5').value == 5


def test_conditional_without_match_is_absent():
    result = Session().run('if 0 then 1')
    assert result.ok
    assert result.value is None


def test_absent_value_cannot_be_used():
    assert evaluate_error('1 + (if 0 then 1)').message == 'Expression produced no value'
    assert evaluate_error('if (if 0 then 1) then 2').message == 'Expression produced no value'

    session = Session()
    assert evaluate_error('sclr z = if 0 then 1', session).message == 'Expression produced no value'
    assert evaluate_error('z', session).message == 'z is not defined'


def test_condition_errors_propagate():
    assert evaluate_error('if 1/0 then 1 else 2').message == 'Division by zero'


def test_evaluation_depth_is_bounded():
    short = '+'.join(['1'] * 100)
    assert evaluate(short).value == 100

    long = '+'.join(['1'] * (MAX_EVAL_DEPTH + 50))
    assert evaluate_error(long).message == 'Maximum evaluation depth exceeded'


def test_interpreter_depth_resets_after_error():
    session = Session(max_eval_depth=5)
    assert evaluate_error('1+1+1+1+1+1', session).message == 'Maximum evaluation depth exceeded'
    assert session.interpreter.depth == 0
    assert evaluate('1+1', session).value == 2


def test_unknown_node_is_a_defect():
    context = Context('<program>', symbol_table=SymbolTable())
    with pytest.raises(NotImplementedError):
        Interpreter().visit(Node(), context)


def test_child_context_scoping_and_traceback():
    root = Context('<program>', symbol_table=SymbolTable())
    root.symbol_table.set('n', evaluate('7'))
    tokens = tokenize('n / 0').value
    child = root.child('<inner>', tokens[0].pos_start)

    res = Interpreter().visit(parse(tokens).node, child)
    assert res.error.message == 'Division by zero'
    assert format_error(res.error).splitlines() == [
        'Traceback',
        '  File <stdin>, line 1, in <program>',
        '  File <stdin>, line 1, in <inner>',
        'Runtime Error: Division by zero (1:5)',
    ]


def test_assignment_writes_to_the_current_context_only():
    root = Context('<program>', symbol_table=SymbolTable())
    child = root.child('<inner>')
    tokens = tokenize('sclr k = 2').value

    res = Interpreter().visit(parse(tokens).node, child)
    assert res.error is None
    assert 'k' in child.symbol_table
    assert 'k' not in root.symbol_table


def test_symbol_table_parent_lookup_and_remove():
    parent = SymbolTable()
    parent.set('a', 1)
    table = SymbolTable(parent)
    table.set('b', 2)
    assert table.get('a') == 1
    assert table.get('b') == 2
    assert table.get('c') is None

    table.set('a', 3)
    assert table.get('a') == 3
    table.remove('a')
    assert table.get('a') == 1
    assert 'b' in table
    table.remove('b')
    assert 'b' not in table


def test_removed_binding_is_unbound():
    session = Session()
    evaluate('sclr gone = 1', session)
    session.global_symbol_table.remove('gone')
    assert evaluate_error('gone', session).message == 'gone is not defined'
