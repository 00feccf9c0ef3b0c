"""lobster: The LOBSTER ocean biogeochemistry model.

Copyright (C), 2024 The lobster developers

This program is free software: you can redistribute it and/or modify
it under the terms of the GNU General Public License as published by
the Free Software Foundation, either version 3 of the License, or
(at your option) any later version.

This program is distributed in the hope that it will be useful,
but WITHOUT ANY WARRANTY; without even the implied warranty of
MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
GNU General Public License for more details.

You should have received a copy of the GNU General Public License
along with this program.  If not, see <https://www.gnu.org/licenses/>.
"""

from __future__ import annotations

import numpy as np
import numpy.typing as npt

# declare numpy types
NDArrayFloat = npt.NDArray[np.float64]


class KeywordError(Exception):
    """Exception raised for errors in keyword arguments.

    Parameters
    ----------
    message : str
        Explanation of the error

    Examples
    --------
    >>> raise KeywordError("Invalid keyword 'xyz'")
    """

    def __init__(self, message):
        message = f"\n\n{message}\n"
        super().__init__(message)


class MissingKeywordError(Exception):
    """Exception raised when a required keyword argument is missing.

    Parameters
    ----------
    message : str
        Explanation of the error

    Examples
    --------
    >>> raise MissingKeywordError("'grid' is a mandatory keyword")
    """

    def __init__(self, message):
        message = f"\n\n{message}\n"
        super().__init__(message)


class InputError(Exception):
    """Exception raised for errors in the input parameters.

    Parameters
    ----------
    message : str
        Explanation of the error

    Examples
    --------
    >>> raise InputError("Value must be positive")
    """

    def __init__(self, message):
        message = f"\n\n{message}\n"
        super().__init__(message)


class TracerError(Exception):
    """Exception raised when a tracer name is not part of the model."""

    def __init__(self, message):
        message = f"\n\n{message}\n"
        super().__init__(message)


class GridError(Exception):
    """Exception raised for malformed grids or fields that do not fit the grid."""

    def __init__(self, message):
        message = f"\n\n{message}\n"
        super().__init__(message)


class SolverError(Exception):
    """Custom Error Class for solver-related errors."""

    def __init__(self, message):
        message = f"\n\n{message}\n"
        super().__init__(message)


class InputParsing:
    """Provides various routines to parse and process keyword arguments.

    All derived classes need to declare the allowed keyword arguments,
    their default values and the type in the following format:

    defaults = {"key": [value, (allowed instances)]}

    The recommended sequence is to first set default values via
    __register_variable_names__() and then update with provided values
    using __update_dict_entries__(defaults, kwargs).

    Notes
    -----
    This class is not meant to be instantiated directly.
    """

    def __init__(self):
        raise NotImplementedError("InputParsing has no instance!")

    def __initialize_keyword_variables__(self, kwargs) -> None:
        """Check, register and update keyword variables.

        Parameters
        ----------
        kwargs : dict
            Dictionary of keyword arguments to process
        """
        self.update = False
        self.__check_mandatory_keywords__(self.lrk, kwargs)
        self.__register_variable_names__(self.defaults, kwargs)
        self.__update_dict_entries__(self.defaults, kwargs)
        self.update = True

    def __check_mandatory_keywords__(self, lrk: list, kwargs: dict) -> None:
        """Verify that all required keywords are present in kwargs.

        Parameters
        ----------
        lrk : list
            List of required keywords
        kwargs : dict
            Dictionary of provided keyword arguments

        Raises
        ------
        MissingKeywordError
            If a required keyword is missing or None
        TypeError
            If lrk is not a list or kwargs is not a dictionary
        """
        if not lrk:
            return

        if not isinstance(lrk, list):
            raise TypeError(f"Required keywords list must be a list, not {type(lrk)}")

        if not isinstance(kwargs, dict):
            raise TypeError(f"Keywords must be a dictionary, not {type(kwargs)}")

        for key in lrk:
            if key not in kwargs:
                raise MissingKeywordError(f"'{key}' is a mandatory keyword")
            elif kwargs[key] is None:
                raise MissingKeywordError(
                    f"'{key}' is a mandatory keyword and cannot be None"
                )

    def __register_variable_names__(
        self,
        defaults: dict[str, list[any, tuple]],
        kwargs: dict,
    ) -> None:
        """Register the default key-value pairs as instance variables.

        Parameters
        ----------
        defaults : dict
            Dictionary with default values and allowed types
        kwargs : dict
            Dictionary of keyword arguments
        """
        for key, value in defaults.items():
            setattr(self, key, value[0])

        # save kwargs dict
        self.kwargs: dict = kwargs

    def __update_dict_entries__(
        self,
        defaults: dict[str, list[any, tuple]],
        kwargs: dict[str, any],
    ) -> None:
        """Validate and update instance attributes with provided keyword arguments.

        Parameters
        ----------
        defaults : dict
            Dictionary with format {"key": [default_value, (allowed_types)]}
        kwargs : dict
            Dictionary with format {"key": value}

        Raises
        ------
        KeywordError
            If a key in kwargs is not in defaults
        InputError
            If a value in kwargs is not of the expected type or fails validation
        ValueError
            If defaults dictionary is empty
        """
        if not defaults:
            raise ValueError("Defaults dictionary cannot be empty")

        for key, value in kwargs.items():
            self.__process_keyword__(defaults, key, value)

    def __process_keyword__(self, defaults, key, value):
        """Process a single keyword argument.

        Parameters
        ----------
        defaults : dict
            Dictionary with format {"key": [default_value, (allowed_types)]}
        key : str
            The keyword to process
        value : any
            The value to validate and set

        Raises
        ------
        KeywordError
            If key is not in defaults
        InputError
            If value is not of the expected type or fails validation
        """
        if key not in defaults:
            raise KeywordError(f"'{key}' is not a valid keyword")

        # None keeps the default
        if value is None:
            return

        expected_types = defaults[key][1]
        self.__validate_value_type__(key, value, expected_types)

        try:
            self._validate_value(key, value)
        except ValueError as err:
            raise InputError(f"Validation failed for '{key}': {str(err)}") from err

        defaults[key][0] = value  # update defaults dictionary
        setattr(self, key, value)

    def __validate_value_type__(self, key, value, expected_types):
        """Validate that a value is of the expected type.

        Raises
        ------
        InputError
            If value is not of the expected type
        """
        if not isinstance(value, expected_types):
            actual_type = type(value).__name__
            if isinstance(expected_types, tuple):
                expected_types_str = ", ".join(t.__name__ for t in expected_types)
            else:
                expected_types_str = expected_types.__name__

            raise InputError(
                f"'{value}' for '{key}' must be of type {expected_types_str}, "
                f"not {actual_type}"
            )

    def _validate_value(self, key, value):
        """Perform additional validation on a keyword value.

        Subclasses override this to enforce ranges. Raise ValueError
        to reject a value.
        """


class lobsterBase(InputParsing):
    """The lobster base class template.

    This class handles keyword arguments and the string
    representation of model objects.

    Examples
    --------
    .. code-block:: python

            # Define required keywords in lrk list
            self.lrk: list = ["grid"]

            # Define allowed type per keyword in defaults dict
            self.defaults: dict[str, list[any, tuple]] = {
                "grid": ["None", (object,)],
                "carbonates": [False, (bool,)],
            }

            # Parse and register all keywords with the instance
            self.__initialize_keyword_variables__(kwargs)
    """

    def __init__(self) -> None:
        raise NotImplementedError

    def __repr__(self) -> str:
        m = f"{self.__class__.__name__}(\n"
        for k, v in self.kwargs.items():
            if isinstance(v, str):
                m = f"{m}    {k} = '{v}',\n"
            elif isinstance(v, list | np.ndarray):
                m = f"{m}    {k} = '{v[:3]}',\n"
            else:
                m = f"{m}    {k} = {v},\n"

        return f"{m})"

    def __str__(self) -> str:
        """Return the class name and the current value of every keyword."""
        off: str = "  "
        m = f"{self.__class__.__name__}\n"
        for k, v in self.defaults.items():
            if isinstance(v[0], np.ndarray):
                m = f"{m}{off}{k}[-1] = {v[0][-1]:.2e}\n"
            else:
                m = f"{m}{off}{k} = {v[0]}\n"

        return m
