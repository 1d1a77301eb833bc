"""Custom exceptions for ecrpush CLI tool.

This module defines a hierarchy of custom exceptions for better error
categorization and handling throughout the application. Every error is
terminal for a run: the CLI prints it and exits with status 1.
"""


class EcrPushError(Exception):
    """Base exception for all ecrpush errors.

    Parameters
    ----------
    message : str
        Error message describing what went wrong.
    details : dict, optional
        Additional structured information about the error.

    Attributes
    ----------
    message : str
        The error message.
    details : dict
        Dictionary containing additional error context.
    """

    def __init__(self, message: str, details: dict = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self):
        """Format error message with optional details and wrapped cause.

        Returns
        -------
        str
            Formatted error message.
        """
        text = self.message
        if self.details:
            details_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
            text = f"{text} ({details_str})"
        if self.__cause__ is not None:
            text = f"{text}: {self.__cause__}"
        return text


class ConfigError(EcrPushError):
    """Configuration loading error.

    Raised when:
    - The configuration file cannot be read
    - The YAML document cannot be mapped onto profiles
    """

    pass


class ConfigReadError(ConfigError):
    """Configuration file is missing, unreadable or not valid YAML."""

    pass


class ConfigParseError(ConfigError):
    """Configuration YAML does not have the expected profiles shape."""

    pass


class ResourceNotFoundError(EcrPushError):
    """Requested resource not found."""

    pass


class ProfileNotFoundError(ResourceNotFoundError):
    """Selected profile is absent from the loaded configuration.

    Parameters
    ----------
    profile : str
        Name of the profile that was requested.
    """

    def __init__(self, profile: str):
        super().__init__(f"Profile '{profile}' not found in configuration")
        self.profile = profile


class ValidationError(EcrPushError):
    """Profile validation error.

    Raised when a required field is empty or the account identifier is
    not a 12-digit string.
    """

    pass


class StepError(EcrPushError):
    """External process step failure.

    Parameters
    ----------
    message : str
        Error message describing the failed step.
    command : list of str or str, optional
        Command that was executed.
    returncode : int, optional
        Exit status of the process, when it ran at all.

    Attributes
    ----------
    command : list of str or str or None
        Command that was executed.
    returncode : int or None
        Exit status if the process was spawned.
    """

    def __init__(self, message: str, command=None, returncode: int = None):
        details = {}
        if returncode is not None:
            details["exit_code"] = returncode

        super().__init__(message, details)
        self.command = command
        self.returncode = returncode


class AuthenticationError(StepError):
    """Registry login pipeline failed."""

    pass


class BuildError(StepError):
    """Image build failed."""

    pass


class TagError(StepError):
    """Image tag failed."""

    pass


class PushError(StepError):
    """Image push failed."""

    pass
