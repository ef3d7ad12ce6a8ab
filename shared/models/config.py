from pydantic import BaseModel


class EnvConfig(BaseModel):
    """
    Represents a single environment setting a client needs before it can be booted.

    Attributes:
        env_key (str): The raw key of the setting. Clients prefix it with their type and engine, e.g. "BASE_URL" becomes "FETCH_HTTP_BASE_URL".
        val_type (str): The expected type of the value. Supported types are "string", "number", "bool", "list" and "dict".
        default (str | int | float | bool | list | dict | None): Fallback if the variable is not set. If None, the variable is required.
    """

    env_key: str
    val_type: str
    default: str | int | float | bool | list | dict | None = None
