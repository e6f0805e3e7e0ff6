import logging

from text2query.client.api_client import ConverterAPIError, ConverterClient
from text2query.client.history import HistoryEntry, HistoryStore, LocalStorage, ViewState
from text2query.core.config import Settings, get_settings
from text2query.core.constants import Dialect
from text2query.core.prompts import EXAMPLE_QUERIES, SCHEMA_HINTS

logger = logging.getLogger(__name__)


class ConverterSession:
    """View-model behind the converter screen.

    Owns the active input and output fields; the history store and API
    client are injected so either can be replaced in tests.
    """

    examples = EXAMPLE_QUERIES
    schema_hints = SCHEMA_HINTS

    def __init__(self, client: ConverterClient, history: HistoryStore, dialect: Dialect = Dialect.SQL):
        self.client = client
        self.history = history
        self.text = ""
        self.dialect = dialect
        self.result = ""
        self.note: str | None = None
        self.error: str | None = None
        self.loading = False
        self.show_hints = False

    @property
    def state(self) -> ViewState:
        return ViewState(text=self.text, dialect=self.dialect, result=self.result)

    def submit(self) -> bool:
        """Convert the current text; True when a result was recorded."""
        if not self.text.strip():
            return False

        self.loading = True
        self.error = None
        self.note = None
        self.result = ""
        try:
            response = self.client.convert(self.text, self.dialect)
        except ConverterAPIError as e:
            logger.error("Error converting text: %s", e.message)
            self.error = e.message
            return False
        finally:
            self.loading = False

        self.result = response.query
        self.note = response.note
        self.history.append(
            HistoryEntry(text=self.text, dialect=self.dialect, result=self.result))
        return True

    def replay(self, entry: HistoryEntry) -> ViewState:
        """Restore a past conversion without contacting the server."""
        view = self.history.replay(entry)
        self.text = view.text
        self.dialect = view.dialect
        self.result = view.result
        self.note = None
        self.error = None
        return view

    def use_example(self, example: str) -> None:
        self.text = example

    def toggle_hints(self) -> bool:
        self.show_hints = not self.show_hints
        return self.show_hints


def create_session(settings: Settings | None = None) -> ConverterSession:
    """Wire a session against the configured API and the profile's history file."""
    settings = settings or get_settings()
    history = HistoryStore(LocalStorage(settings.HISTORY_FILE))
    history.rehydrate()
    return ConverterSession(ConverterClient(base_url=settings.API_URL), history)
