import json
from typing import Any, Optional

from django.core.serializers.json import DjangoJSONEncoder

from maintenance_cache.exceptions import DeserializationError


class JsonSerializer:
    """
    Codec used to turn maintenance state into cache payloads and back.

    Payloads are plain JSON text so the values stored under the maintenance
    keys can be read directly from the cache backend by other tooling.
    """

    def serialize(self, value: Any) -> str:
        """
        Encode a value as JSON text.

        Args:
            value (Any): The value to encode. Only booleans and lists of
                strings are stored by this application.

        Returns:
            str: The JSON representation of ``value``.
        """
        return json.dumps(value, cls=DjangoJSONEncoder)

    def unserialize(self, payload: Optional[str]) -> Any:
        """
        Decode JSON text produced by ``serialize``.

        Args:
            payload (Optional[str]): The raw payload loaded from the cache.
                ``None`` means the key was absent.

        Returns:
            Any: The decoded value.

        Raises:
            DeserializationError: If the payload is missing, empty or not
                valid JSON.
        """
        if payload is None or payload == "":
            raise DeserializationError("Unable to unserialize an empty value")

        try:
            if isinstance(payload, bytes):
                payload = payload.decode("utf-8")
            return json.loads(payload)
        except (TypeError, ValueError) as exc:
            raise DeserializationError(f"Unable to unserialize value: {exc}") from exc
