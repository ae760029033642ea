# Cas.py
"""""
Equation resolver: isolates the single variable of `L = R` by undoing the
operators around it one at a time and writes the result into the scope.

    2x + 4 = 10   ->   2x = 10 - 4   ->   x = 6 / 2

Also hosts calculate(), the entry point used by the UI and the console runner.
"""""

from . import config_manager as config_manager
from . import MathEngine as MathEngine
from . import ScientificEngine as SE
from . import error as E
from .ComplexNumber import ONE, ZERO
from .MathEngine import BinOp, Number, ValueList, Variable, simplify, evaluate

# Debug toggle for optional prints in this module
debug = config_manager.load_setting_value("debug") == True


def has_variable(node):
    if isinstance(node, Variable):
        return True
    if isinstance(node, BinOp):
        return has_variable(node.left) or has_variable(node.right)
    return False


def _divide_values(values, divisor):
    if isinstance(values, list):
        return [SE.divide(value, divisor) for value in values]
    return SE.divide(values, divisor)


def _log_node(node, scope):
    values = evaluate(node, scope)
    if isinstance(values, list):
        return ValueList(tuple(SE.log(value) for value in values))
    return Number(SE.log(values))


def _value_node(values):
    if isinstance(values, list):
        if len(values) == 1:
            return Number(values[0])
        return ValueList(tuple(values))
    return Number(values)


def resolve_equation(left, right, scope):
    """Isolate the variable in `left` (which must be the only side with one) and bind it in `scope`."""
    left = simplify(left, scope)
    right = simplify(right, scope)

    if debug == True:
        print(f"Resolving: {left} = {right}")

    if has_variable(right):
        raise E.EquationShapeError("Cannot resolve equation with variable on the right side", code="3037")
    if not has_variable(left):
        raise E.SolverError("No Solution", code="3014")

    # Right side has no variable: reduce it to a value, so (1+i)*x stays a scaled Variable
    right = _value_node(evaluate(right, scope))

    # x = value  (c*x = value  ->  x = value / c)
    if isinstance(left, Variable):
        scope[left.name] = _divide_values(evaluate(right, scope), left.coefficient)
        return scope

    operator = left.operator
    left_has_variable = has_variable(left.left)
    right_has_variable = has_variable(left.right)
    if left_has_variable and right_has_variable:
        raise E.SolverError(f"Non linear problem: variable on both sides of '{operator}'", code="3005")

    if operator == '^':
        if left_has_variable:
            # x^n = r  ->  x = every n-th root of r
            if isinstance(left.right, Number):
                return resolve_equation(left.left, MathEngine.multiple_root_var(right, left.right.value), scope)
            return resolve_equation(left.left, BinOp(right, '^', BinOp(Number(ONE), '/', left.right)), scope)
        # b^x = r  ->  x = log(r) / log(b)
        return resolve_equation(left.right, BinOp(_log_node(right, scope), '/', _log_node(left.left, scope)), scope)

    elif operator == '*':
        if left_has_variable:
            return resolve_equation(left.left, BinOp(right, '/', left.right), scope)
        return resolve_equation(left.right, BinOp(right, '/', left.left), scope)

    elif operator == '/':
        if left_has_variable:
            return resolve_equation(left.left, BinOp(right, '*', left.right), scope)
        # a/x = r  ->  r*x = a
        return resolve_equation(BinOp(right, '*', left.right), left.left, scope)

    elif operator == '+':
        if left_has_variable:
            return resolve_equation(left.left, BinOp(right, '-', left.right), scope)
        return resolve_equation(left.right, BinOp(right, '-', left.left), scope)

    elif operator == '-':
        if left_has_variable:
            return resolve_equation(left.left, BinOp(right, '+', left.right), scope)
        # a - x = r  ->  x = a - r
        return resolve_equation(left.right, BinOp(left.left, '-', right), scope)

    elif operator == '±':
        if left_has_variable:
            return resolve_equation(left.left, BinOp(right, '±', left.right), scope)
        # a ± x = r  ->  x = ±(r - a)
        return resolve_equation(left.right, BinOp(Number(ZERO), '±', BinOp(right, '-', left.left)), scope)

    raise E.SolverError(f"Non linear problem: cannot isolate the variable in {left}", code="3005")


def resolve(source, scope=None):
    """Evaluate an expression or resolve an equation.

    'expression'  -> its value (or list of values)
    'L = R'       -> the scope, with the variable of L or R bound
    """
    if scope is None:
        scope = {}

    parts = source.split('=')
    if len(parts) > 2:
        raise E.EquationShapeError(f"Invalid equation, more than one '=': {source}", code="3012")

    try:
        simplified = [simplify(MathEngine.parse(part), scope) for part in parts]

        if len(simplified) == 1:
            return evaluate(simplified[0], scope)

        left, right = simplified
        if has_variable(left) and not has_variable(right):
            return resolve_equation(left, right, scope)
        if has_variable(right) and not has_variable(left):
            return resolve_equation(right, left, scope)
    except RecursionError:
        raise E.CalculationError("Expression nested too deeply.", code="3033")

    raise E.EquationShapeError("Exactly one side of the equation needs a variable.", code="3037")


# -----------------------------
# Public entry point
# -----------------------------

def calculate(problem, scope=None):
    """Main API for the UI: resolve -> format -> (text, mode).

    Mode:
        1. Variable and rounding
        2. Variable and no rounding
        3. No variable but rounding
        4. No variable, no rounding
    """
    settings = config_manager.load_setting_value("all")
    ungefaehr_zeichen = "\u2248"  # "≈"
    if scope is None:
        scope = {}
    before = dict(scope)

    try:
        ergebnis = resolve(problem, scope)

        if ergebnis is scope:
            solved = [name for name in scope if name not in before or scope[name] is not before[name]]
            lines = []
            rounding = False
            for name in solved:
                text, rounded = MathEngine.cleanup(scope[name], settings["decimal_places"])
                rounding = rounding or rounded
                sign = ungefaehr_zeichen if rounded else "="
                lines.append(f"{name} {sign} {text}")
            return "\n".join(lines), (1 if rounding else 2)

        text, rounding = MathEngine.cleanup(ergebnis, settings["decimal_places"])
        return text, (3 if rounding else 4)

    # Re-raise our domain errors after attaching the source equation
    except E.MathError as e:
        e.equation = problem
        raise e
    # Convert unexpected Python exceptions to our unified error type
    except Exception as e:
        raise E.MathError(message=str(e).strip(), code="9999", equation=problem)


def test_main():
    """Simple REPL-like runner for manual testing of the engine."""
    scope = {}
    print("Enter the problem (empty line quits): ")
    while True:
        problem = input("> ").strip()
        if not problem:
            break
        try:
            ergebnis, mode = calculate(problem, scope)
            print(ergebnis)
        except E.MathError as e:
            print(f"Error {e.code}: {E.ERROR_MESSAGES.get(e.code, '')}{e.message}")


if __name__ == "__main__":
    test_main()
