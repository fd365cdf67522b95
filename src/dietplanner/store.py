"""Key-value persistence for checked grocery items and the selected diet."""

from typing import Any, Protocol

from sqlalchemy import Engine
from sqlalchemy.exc import SQLAlchemyError

from dietplanner.database import Preference, create_preferences_engine, make_session_factory
from dietplanner.logging_config import get_logger
from dietplanner.schemas import DietType

logger = get_logger(__name__)

CHECKED_INGREDIENTS_KEY = "checked_ingredients"
SELECTED_DIET_KEY = "selected_diet_type"


class PreferenceStoreError(Exception):
    """Raised when the backing store cannot be read or written."""

    def __init__(self, message: str, key: str | None = None):
        super().__init__(message)
        self.key = key


class PreferenceStore(Protocol):
    """Anything that can read and write a named value."""

    def get(self, key: str) -> Any | None: ...

    def set(self, key: str, value: Any) -> None: ...


class InMemoryStore:
    """Process-local store, used by tests and ephemeral sessions."""

    def __init__(self, initial: dict[str, Any] | None = None):
        self._values: dict[str, Any] = dict(initial or {})

    def get(self, key: str) -> Any | None:
        return self._values.get(key)

    def set(self, key: str, value: Any) -> None:
        self._values[key] = value


class SqlPreferenceStore:
    """Store backed by the ``preferences`` table."""

    def __init__(self, engine: Engine):
        self.engine = engine
        self._session_factory = make_session_factory(engine)

    @classmethod
    def from_url(cls, url: str) -> "SqlPreferenceStore":
        return cls(create_preferences_engine(url))

    def get(self, key: str) -> Any | None:
        try:
            with self._session_factory() as session:
                row = session.get(Preference, key)
                return row.value if row else None
        except SQLAlchemyError as e:
            raise PreferenceStoreError(f"Failed to read preference '{key}': {e}", key=key) from e

    def set(self, key: str, value: Any) -> None:
        try:
            with self._session_factory.begin() as session:
                row = session.get(Preference, key)
                if row is None:
                    session.add(Preference(key=key, value=value))
                else:
                    row.value = value
        except SQLAlchemyError as e:
            raise PreferenceStoreError(f"Failed to write preference '{key}': {e}", key=key) from e


class CheckedItemsRepository:
    """Set of checked grocery item names, overwritten as a whole on save."""

    def __init__(self, store: PreferenceStore, key: str = CHECKED_INGREDIENTS_KEY):
        self.store = store
        self.key = key

    def load(self) -> set[str]:
        value = self.store.get(self.key)
        if value is None:
            return set()
        if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
            logger.warning(f"Ignoring malformed value under '{self.key}': {value!r}")
            return set()
        return set(value)

    def save(self, names: set[str]) -> None:
        self.store.set(self.key, sorted(names))


class DietSelectionRepository:
    """The diet catalog the user picked last."""

    def __init__(
        self,
        store: PreferenceStore,
        default: DietType = DietType.CALORIE_DEFICIT,
        key: str = SELECTED_DIET_KEY,
    ):
        self.store = store
        self.default = default
        self.key = key

    def load(self) -> DietType:
        value = self.store.get(self.key)
        if value is None:
            return self.default
        return DietType.from_label(str(value))

    def save(self, diet: DietType) -> None:
        self.store.set(self.key, diet.value)
