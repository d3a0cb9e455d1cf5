import json
from typing import IO, Any, Dict, Optional

import click

from s3bridge.api import CommonServiceException
from s3bridge.s3.exceptions import ProviderError


class CLIError(click.ClickException):
    """
    A failed command. The message is printed in red to stderr, followed by the error details reported by the
    storage service, if there are any.
    """

    details: Optional[Dict[str, Any]]

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.details = details

    @classmethod
    def from_exception(cls, e: Exception) -> "CLIError":
        if isinstance(e, ProviderError):
            return cls(str(e), details=e.to_dict())
        if isinstance(e, CommonServiceException):
            return cls(f"{e.code}: {e.message}")
        return cls(str(e))

    def format_message(self) -> str:
        message = click.style(f"Error: {self.message}", fg="red")
        if self.details:
            message += "\n" + json.dumps(self.details, indent=2)
        return message

    def show(self, file: Optional[IO[Any]] = None) -> None:
        click.echo(self.format_message(), file=file, err=True)
