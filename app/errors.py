# app/errors.py


class NotFoundError(Exception):
    """No record in the collection matches the requested id."""

    status_code = 404

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_response(self):
        return {"message": self.message}
