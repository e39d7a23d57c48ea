"""
Root of the FoodCart exception tree.
"""


class FoodCartException(Exception):
    """
    Base for every cart, persistence, network, payment and placement error.

    `details` carries the ids and states involved (branch ids, storage keys,
    HTTP status) so log lines and the checkout flow can use them without
    parsing the message.
    """

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message)
        self.message = message
        self.details = dict(details) if details else {}

    def __str__(self) -> str:
        return self.message

    def __repr__(self) -> str:
        name = type(self).__name__
        if not self.details:
            return f"{name}('{self.message}')"
        context = ', '.join(f"{key}={value}" for key, value in self.details.items())
        return f"{name}('{self.message}', {context})"
