"""
Tracker Session

One interactive session of the tracker. Owns the per-session state the
presentation layer renders (current view, menu flag, form fields,
latest snapshots) and wires the collaborators to the metrics engine:

1. Identity subscription: sign-in starts the data subscriptions,
   sign-out tears them down
2. Storage subscriptions: every entries or settings snapshot replaces
   the session's copy
3. Metrics: recomputed from scratch for each (entries, reference date)
4. Writes: fire-and-forget; failures are logged and surfaced in
   ``error`` without touching the metrics
"""

import logging
from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Callable, Optional, Union

from pydantic import ValidationError

from ..collaborators.errors import AuthenticationError, TrackerError
from ..collaborators.identity import IdentityProvider, User
from ..collaborators.schemas import EntryForm, GoalsForm
from ..collaborators.storage import TrackerStore
from ..config.settings import Settings, get_settings
from ..core.entities import Goals
from ..metrics.calculator import aggregate_entries, daily_target, scenario, ScenarioResult
from ..metrics.dashboard import DashboardData, generate_dashboard

logger = logging.getLogger(__name__)


class View(Enum):
    """The views a session can show."""
    DASHBOARD = "dashboard"
    ENTRY = "entry"
    SETTINGS = "settings"


@dataclass
class EntryFormState:
    """Raw entry form fields, as typed by the user."""
    date: str = field(default_factory=lambda: date.today().isoformat())
    sales: str = ""
    leads: str = ""
    cancellations: str = ""

    def clear_amounts(self) -> None:
        self.sales = ""
        self.leads = ""
        self.cancellations = ""


class TrackerSession:
    """
    Interactive session state and collaborator wiring.

    The metrics engine is only ever called from here as a pure function;
    it never sees the subscriptions.
    """

    def __init__(
        self,
        identity: IdentityProvider,
        store: TrackerStore,
        settings: Settings = None,
        today: Callable[[], date] = None
    ):
        self._identity = identity
        self._store = store
        self._settings = settings or get_settings()
        self._today = today or date.today

        self.user: Optional[User] = None
        self.view = View.DASHBOARD
        self.menu_open = False
        self.loading = True
        self.error: Optional[str] = None
        self.auth_error: Optional[str] = None

        self.entries: list = []
        self.goals: Goals = self._default_goals()
        self.entry_form = EntryFormState(date=self._today().isoformat())

        self._identity_unsub: Optional[Callable[[], None]] = None
        self._data_unsubs: list = []
        self._stats_key = None
        self._stats = None

    def _default_goals(self) -> Goals:
        return self._settings.goals.to_goals()

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def start(self) -> None:
        """Begin listening for sign-in and sign-out."""
        if self._identity_unsub is None:
            self._identity_unsub = self._identity.subscribe(self._on_user)

    def close(self) -> None:
        """Drop every subscription held by this session."""
        self._unsubscribe_data()
        if self._identity_unsub is not None:
            self._identity_unsub()
            self._identity_unsub = None

    def _unsubscribe_data(self) -> None:
        for unsubscribe in self._data_unsubs:
            unsubscribe()
        self._data_unsubs = []

    def _on_user(self, user: Optional[User]) -> None:
        self._unsubscribe_data()
        self.user = user

        if user is None:
            self.entries = []
            self.goals = self._default_goals()
            self.loading = False
            return

        logger.info("Session started for %s", user.uid)
        self.loading = True
        self._data_unsubs.append(self._store.subscribe_settings(
            user.uid, self._on_settings, self._on_settings_error
        ))
        self._data_unsubs.append(self._store.subscribe_entries(
            user.uid, self._on_entries, self._on_entries_error
        ))

    def _on_settings(self, record: Optional[dict]) -> None:
        # An absent settings record keeps the current goals
        if record is not None:
            self.goals = Goals.from_settings(record)

    def _on_settings_error(self, err: Exception) -> None:
        logger.error("Settings error: %s", err)

    def _on_entries(self, entries: list) -> None:
        self.entries = list(entries)
        self.loading = False

    def _on_entries_error(self, err: Exception) -> None:
        logger.error("Entries error: %s", err)
        self.loading = False

    # ------------------------------------------------------------------
    # Authentication
    # ------------------------------------------------------------------

    def sign_in(self, email: str, password: str) -> bool:
        return self._authenticate(lambda: self._identity.sign_in(email, password))

    def sign_up(self, email: str, password: str, display_name: str = "") -> bool:
        return self._authenticate(
            lambda: self._identity.sign_up(email, password, display_name)
        )

    def sign_out(self) -> bool:
        return self._authenticate(self._identity.sign_out)

    def _authenticate(self, action: Callable) -> bool:
        self.auth_error = None
        try:
            action()
        except AuthenticationError as e:
            logger.warning("Authentication failed: %s", e)
            self.auth_error = e.user_message
            return False
        return True

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------

    def navigate(self, view: Union[View, str]) -> None:
        """Switch view and close the menu. Unknown names raise ValueError."""
        self.view = View(view)
        self.menu_open = False

    def toggle_menu(self) -> None:
        self.menu_open = not self.menu_open

    # ------------------------------------------------------------------
    # Metrics
    # ------------------------------------------------------------------

    @property
    def reference_date(self) -> date:
        return self._today()

    @property
    def stats(self) -> dict:
        """Window aggregates, recomputed only when entries or the date change."""
        key = (tuple(self.entries), self.reference_date)
        if key != self._stats_key:
            self._stats = aggregate_entries(self.entries, key[1])
            self._stats_key = key
        return self._stats

    def dashboard(self) -> DashboardData:
        return generate_dashboard(
            self.entries,
            goals=self.goals,
            today=self.reference_date,
            aggregates=self.stats
        )

    def daily_target(self, appointment_count: float = None, target_ratio: float = None) -> float:
        if appointment_count is None:
            appointment_count = self._settings.default_appointment_count
        if target_ratio is None:
            target_ratio = self.goals.high
        return daily_target(appointment_count, target_ratio)

    def scenario(
        self,
        current_net_sales: float = 0,
        current_leads: int = 0,
        added_sale_amount: float = 0
    ) -> ScenarioResult:
        return scenario(current_net_sales, current_leads, added_sale_amount)

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def update_entry_form(self, **fields) -> None:
        for name, value in fields.items():
            if not hasattr(self.entry_form, name):
                raise ValueError(f"Unknown entry field: {name}")
            setattr(self.entry_form, name, value)

    def save_entry(self) -> Optional[str]:
        """
        Submit the entry form.

        On success the amount fields are cleared and the dashboard is
        shown; on failure the form is kept and ``error`` is set.
        """
        if self.user is None:
            return None

        self.error = None
        try:
            form = EntryForm(
                date=self.entry_form.date,
                sales=self.entry_form.sales,
                leads=self.entry_form.leads,
                cancellations=self.entry_form.cancellations
            )
        except ValidationError as e:
            logger.warning("Rejected entry form: %s", e)
            self.error = f"Invalid entry date: {self.entry_form.date!r}"
            return None

        try:
            entry_id = self._store.create_entry(self.user.uid, form.to_record())
        except TrackerError as e:
            logger.error("Error saving entry: %s", e)
            self.error = str(e)
            return None

        self.entry_form.clear_amounts()
        self.navigate(View.DASHBOARD)
        return entry_id

    def delete_entry(self, entry_id: str) -> bool:
        if self.user is None:
            return False

        self.error = None
        try:
            self._store.delete_entry(self.user.uid, entry_id)
        except TrackerError as e:
            logger.error("Error deleting: %s", e)
            self.error = str(e)
            return False
        return True

    def update_goals(self, high=None, medium=None) -> None:
        """Edit the session's goals in place; values are coerced like form input."""
        form = GoalsForm(
            high=self.goals.high if high is None else high,
            medium=self.goals.medium if medium is None else medium
        )
        self.goals = form.to_goals()

    def save_goals(self) -> bool:
        if self.user is None:
            return False

        self.error = None
        try:
            self._store.upsert_settings(self.user.uid, {"goals": self.goals.to_record()})
        except TrackerError as e:
            logger.error("Error saving goals: %s", e)
            self.error = str(e)
            return False

        self.navigate(View.DASHBOARD)
        return True
