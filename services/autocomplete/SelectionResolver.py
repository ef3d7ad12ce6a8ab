"""Selection resolver.

Matches the caller's current value (an id, a list of ids, or already hydrated
items) against the options loaded so far. A value that is not loaded yet is
not an error, it simply resolves to nothing.
"""

from typing import Any

from shared.helper.field_path import resolve_field
from shared.models.field import FieldSpec
from shared.models.selector import SelectionValue

_SCALARS = (str, int, float)


def is_scalar(value: Any) -> bool:
    return isinstance(value, _SCALARS)


def stringify_value(value: Any) -> str | None:
    """Normalize an id for comparison: 1, 1.0 and "1" all become "1".

    Args:
        value (Any): A scalar id.

    Returns:
        str | None: The comparable form, None for None.
    """
    if value is None:
        return None
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


class SelectionResolver:
    """Resolves selection values against options using the value field."""

    def __init__(self, value_field: FieldSpec) -> None:
        self._value_field = value_field

    ##########################################
    ################ HELPERS #################
    ##########################################

    def get_option_value(self, option: Any) -> str | None:
        """
        Returns the stringified value field of an option, None if it has none.
        """
        return stringify_value(resolve_field(option, self._value_field))

    def _member_value(self, member: Any) -> str | None:
        # ids compare as they are, hydrated items through their value field
        if is_scalar(member):
            return stringify_value(member)
        return self.get_option_value(member)

    ##########################################
    ################# CORE ###################
    ##########################################

    def resolve(self, value: SelectionValue, options: list[Any]) -> Any | list[Any] | None:
        """Find the loaded option(s) a selection value stands for.

        Args:
            value (SelectionValue): None, an id, a list of ids, an item or a list of items.
            options (list[Any]): The options loaded so far.

        Returns:
            Any | list[Any] | None:
                - None for None, or for an id that is not loaded.
                - The first option matching an id.
                - The options matching a list of ids, in options order.
                - Hydrated items unchanged.
        """
        if value is None:
            return None

        if is_scalar(value):
            wanted = stringify_value(value)
            for option in options:
                if self.get_option_value(option) == wanted:
                    return option
            return None

        if isinstance(value, (list, tuple)):
            if not all(is_scalar(member) for member in value):
                return list(value)
            wanted_values = {stringify_value(member) for member in value}
            return [option for option in options if self.get_option_value(option) in wanted_values]

        return value

    def is_option_equal_to_value(self, option: Any, value: SelectionValue) -> bool:
        """Equality predicate for highlighting the selected option(s).

        Args:
            option (Any): A candidate option.
            value (SelectionValue): The current value.

        Returns:
            bool: True if the option's value field matches the value, or any member of a list value.
                Empty values are never equal.
        """
        if value is None or value == "" or (isinstance(value, (list, tuple)) and not value):
            return False

        option_value = self.get_option_value(option)
        if option_value is None:
            return False

        if isinstance(value, (list, tuple)):
            return any(self._member_value(member) == option_value for member in value)
        return self._member_value(value) == option_value
