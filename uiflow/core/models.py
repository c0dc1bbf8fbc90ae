from dataclasses import dataclass


@dataclass(frozen=True)
class RegistrationData:
    """中文：注册表单数据，每个用例新建。
    English: Registration form payload, built fresh per test case.
    """

    first_name: str
    last_name: str
    email: str
    password: str

    def __repr__(self):
        return (
            f"RegistrationData(first_name={self.first_name!r}, last_name={self.last_name!r}, "
            f"email={self.email!r}, password='****')"
        )
