import re

# octavalidate marks invalid inputs with this class
ERROR_CLASS = re.compile(r"octavalidate-inp-error")
VALIDATION_ATTRIBUTE = "octavalidate"


class ValidationRules:
    """中文：octavalidate 属性中的校验规则。
    English: Validation rules carried in the octavalidate attribute.
    """

    EMAIL = "R,EMAIL"
    ALPHA_ONLY = "R,ALPHA_ONLY"
    SURNAME = "R,SURNAME"
