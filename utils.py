from errors import ValidationError


class Validator:
    @staticmethod
    def is_present(value) -> bool:
        """A field counts as present only if it is a non-empty string"""
        return isinstance(value, str) and value != ''

    @staticmethod
    def require(message: str, *values):
        """Raise ValidationError(message) unless every value is present"""
        if not all(Validator.is_present(v) for v in values):
            raise ValidationError(message)

    @staticmethod
    def validate_password(password: str, min_length: int) -> bool:
        return len(password) >= min_length

    @staticmethod
    def optional_string(value):
        """
        Profile fields: empty or missing values mean "keep current" (None),
        non-empty strings are kept, anything else is malformed.
        """
        if not value:
            return None
        if not isinstance(value, str):
            raise ValidationError("Invalid user data")
        return value


def get_json_body(req) -> dict:
    """
    Request body as a dict. Missing, malformed or non-object JSON becomes {}
    so that field validation reports it.
    """
    data = req.get_json(silent=True)
    if not isinstance(data, dict):
        return {}
    return data
