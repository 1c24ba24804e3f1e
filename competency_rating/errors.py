"""Error taxonomy for rating submission, lookup and storage failures.

Every error carries the HTTP status it maps to and a JSON body; the app
factory registers one handler that renders them at the request boundary.
"""


class RatingError(Exception):
    status_code = 500

    def __init__(self, message, **details):
        super().__init__(message)
        self.message = message
        self.details = details

    def to_dict(self):
        body = {"message": self.message}
        body.update(self.details)
        return body


class ValidationError(RatingError):
    """Malformed or incomplete input. Raised before anything is written."""

    status_code = 400

    def __init__(self, message, errors=None):
        super().__init__(message)
        self.errors = errors or {}

    def to_dict(self):
        body = {"message": self.message}
        if self.errors:
            body["errors"] = self.errors
        return body


class ConflictError(RatingError):
    """The rater already has ratings for the candidate and item number."""

    status_code = 409

    def __init__(self, existing_count, message="Existing ratings found for this candidate and item number"):
        super().__init__(message)
        self.existing_count = existing_count

    def to_dict(self):
        return {
            "message": self.message,
            "requiresUpdate": True,
            "existingCount": self.existing_count,
        }


class NotFoundError(RatingError):
    status_code = 404


class PersistenceError(RatingError):
    """Storage failure. Rows committed before the failure keep their audit entries."""

    status_code = 500

    def __init__(self, message, written=0):
        super().__init__(message)
        self.written = written

    def to_dict(self):
        return {"message": f"Server error: {self.message}", "written": self.written}
