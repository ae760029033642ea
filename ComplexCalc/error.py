class MathError(Exception):
    def __init__(self, message, code="9999", equation=None):
        super().__init__(message)
        self.message = message
        self.code = code
        self.equation = equation

class ExpressionSyntaxError(MathError):
    pass

class CalculationError(MathError):
    pass

class SolverError(MathError):
    pass


# Errors raised while reading the expression text
class TokenizationError(ExpressionSyntaxError):
    pass

class ParseError(ExpressionSyntaxError):
    pass


# Errors raised while evaluating a tree
class UnboundVariableError(CalculationError):
    pass

class UnknownConstantError(CalculationError):
    pass

class InvalidValueError(CalculationError):
    pass


class EquationShapeError(SolverError):
    pass




Error_Dictionary= {

    "1" : "Missing Files",
    "2" : "Scientific Calculation Error",
    "3" : "Calculator Error",
    "4" : "UI Error",
    "5" : "Configuration Error",
    "9" : "Unexpected Error"

}

#Error Messages are structured in:
# 1. Digit: Main Error
# 2. Digit: Specification
# 3. and 4. Digit: Error Number



ERROR_MESSAGES = {
    "2002" : "Logarithm of zero is undefined.",
    "2004" : "Unable to identify given Operation: ", # + Given Problem


    "3003" : "Division by Zero",
    "3004" : "Invalid Operator: ", # + operator
    "3005" : "Non linear problem. ",
    "3008" : "More than one '.' in one number.",
    "3009" : "Missing ')'. ",
    "3010" : "Missing '('. ",
    "3011" : "Unknown character: ", # + character
    "3012" : "Invalid equation:  ", # + Equation
    "3014" : "No Solution",
    "3026" : "Number too big.",
    "3027" : "Missing Number.",
    "3031" : "Invalid numeric value: ", # + value
    "3032" : "'e' and 'i' are reserved constants.",
    "3033" : "Expression nested too deeply.",
    "3034" : "Variable has no value: ", # + variable
    "3035" : "Unknown constant: ", # + constant
    "3036" : "Expression could not be evaluated.",
    "3037" : "Exactly one side of the equation needs a variable.",


    "4002" : "Calculation already Running!",
    "4501" : "Not all Settings could be saved: ", # + Error raising setting



    "9999" : "Unexpected Error: " #+error
}
