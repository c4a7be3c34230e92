"""Helpers for reading request variables and user memory."""

from typing import Any, Iterable

from lexia.models import Memory, Variable

OPENAI_API_KEY_VARIABLE = "OPENAI_API_KEY"


def _variable_pair(variable: Variable | dict[str, Any]) -> tuple[str | None, Any]:
    if isinstance(variable, Variable):
        return variable.name, variable.value
    return variable.get("name"), variable.get("value")


def get_variable_value(
    variables: Iterable[Variable | dict[str, Any]] | None,
    name: str,
) -> Any | None:
    """Get a variable's value by name, or None if it is not present."""
    for variable in variables or []:
        var_name, value = _variable_pair(variable)
        if var_name == name:
            return value
    return None


def get_openai_api_key(
    variables: Iterable[Variable | dict[str, Any]] | None,
) -> str | None:
    """Get the OpenAI API key passed in the request variables."""
    return get_variable_value(variables, OPENAI_API_KEY_VARIABLE)


class Variables:
    """Name-indexed view over a request's variables."""

    def __init__(self, variables: Iterable[Variable | dict[str, Any]] | None = None) -> None:
        self._values: dict[str, Any] = {}
        for variable in variables or []:
            name, value = _variable_pair(variable)
            if name:
                self._values[name] = value

    def get(self, name: str, default: Any = None) -> Any:
        return self._values.get(name, default)

    def has(self, name: str) -> bool:
        return name in self._values

    def names(self) -> list[str]:
        return list(self._values.keys())

    def to_dict(self) -> dict[str, Any]:
        return dict(self._values)

    def __len__(self) -> int:
        return len(self._values)


class MemoryHelper:
    """
    Accessors over the user memory sent with a request.

    Accepts a Memory model, a plain dict, or None.
    """

    def __init__(self, memory: Memory | dict[str, Any] | None = None) -> None:
        if isinstance(memory, Memory):
            self._memory = memory
        elif memory:
            self._memory = Memory.model_validate(memory)
        else:
            self._memory = Memory()

    def get_user_name(self) -> str | None:
        return self._memory.name

    def get_goals(self) -> list[str]:
        return list(self._memory.goals)

    def get_location(self) -> str | None:
        return self._memory.location

    def get_interests(self) -> list[str]:
        return list(self._memory.interests)

    def get_preferences(self) -> list[str]:
        return list(self._memory.preferences)

    def get_past_experiences(self) -> list[str]:
        return list(self._memory.past_experiences)

    def has_memory(self) -> bool:
        """Check whether any memory field is filled in."""
        return any(
            (
                self._memory.name,
                self._memory.goals,
                self._memory.location,
                self._memory.interests,
                self._memory.preferences,
                self._memory.past_experiences,
            )
        )

    def to_prompt_context(self) -> str:
        """Render the memory as lines suitable for a system prompt."""
        lines = []
        if self._memory.name:
            lines.append(f"User name: {self._memory.name}")
        if self._memory.location:
            lines.append(f"Location: {self._memory.location}")
        if self._memory.goals:
            lines.append(f"Goals: {', '.join(self._memory.goals)}")
        if self._memory.interests:
            lines.append(f"Interests: {', '.join(self._memory.interests)}")
        if self._memory.preferences:
            lines.append(f"Preferences: {', '.join(self._memory.preferences)}")
        if self._memory.past_experiences:
            lines.append(f"Past experiences: {', '.join(self._memory.past_experiences)}")
        return "\n".join(lines)
