"""Balance Validator — unbalanced curly braces and parentheses."""

from previewguard.validators.balance import check_brace_balance
from previewguard.validators.base import BaseValidator
from previewguard.validators.models import ErrorType, ValidationError


def describe_imbalance(count: int, noun: str) -> str:
    """'missing 2 closing' / 'extra 1 closing' wording shared by both validators."""
    if count > 0:
        return f"missing {count} closing {noun}(s)"
    return f"extra {abs(count)} closing {noun}(s)"


class BalanceValidator(BaseValidator):
    """Delimiter balance outside comments, strings and template bodies."""

    @property
    def name(self) -> str:
        return "BalanceValidator"

    def validate(self, code: str) -> list[ValidationError]:
        errors = []
        balance = check_brace_balance(code)

        if balance.curly != 0:
            errors.append(self._error(
                error_type=ErrorType.SYNTAX,
                message=f"Unbalanced curly braces: {describe_imbalance(balance.curly, 'brace')}",
            ))
        if balance.paren != 0:
            errors.append(self._error(
                error_type=ErrorType.SYNTAX,
                message=f"Unbalanced parentheses: {describe_imbalance(balance.paren, 'paren')}",
            ))

        return errors
