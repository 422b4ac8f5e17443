"""Main application class for the Kubik dashboard."""

from __future__ import annotations

import asyncio
import logging

from textual.app import App
from textual.binding import Binding

from kubik.constants import APP_TITLE
from kubik.controllers.base.errors import AuthenticationFailed, KubikError
from kubik.controllers.cluster.auth import OAuthAuthenticator
from kubik.controllers.cluster.client import ClusterClient
from kubik.controllers.cluster.connection import ConnectionProfile
from kubik.controllers.logs.log_follower import LogFollower
from kubik.controllers.pods.watch_controller import PodWatchController
from kubik.keyboard.app import APP_BINDINGS
from kubik.models.core.request import Credentials
from kubik.models.state.config_manager import (
    AppSettings,
    ConfigLoadError,
    ConfigManager,
    ConfigSaveError,
)
from kubik.models.state.session import DashboardSession
from kubik.screens.dashboard import (
    CredentialsScreen,
    DashboardScreen,
    NamespaceSelectScreen,
    PodSelected,
)

logger = logging.getLogger(__name__)


class KubikApp(App[None]):
    """Terminal dashboard for the pods of one namespace."""

    TITLE = APP_TITLE
    BINDINGS: list[Binding] = APP_BINDINGS

    # Type hints for attributes set up on mount
    settings: AppSettings
    dashboard: DashboardScreen
    watcher: PodWatchController
    log_follower: LogFollower

    def __init__(
        self,
        profile: ConnectionProfile,
        namespace: str | None = None,
        *,
        client: ClusterClient | None = None,
        settings: AppSettings | None = None,
        **kwargs,
    ) -> None:
        super().__init__(**kwargs)
        self.profile = profile
        if settings is not None:
            self.settings = settings
        else:
            self._load_settings()

        self.session = DashboardSession(namespace=namespace or profile.initial_namespace)
        self.client = client or ClusterClient(
            profile,
            authenticator=OAuthAuthenticator(
                self.prompt_credentials,
                max_prompts=self.settings.max_credential_prompts,
            ),
            request_timeout=self.settings.request_timeout,
        )
        self._last_username = ""

    def _build_dashboard(self) -> None:
        """Create the dashboard screen and the controllers feeding it."""
        self.dashboard = DashboardScreen(self.session, self.settings)
        listener = self.dashboard.presenter
        self.watcher = PodWatchController(
            self.client,
            self.session,
            listener,
            refresh_interval=self.settings.age_refresh_interval,
            relist_on_expired=self.settings.relist_on_expired_watch,
        )
        self.log_follower = LogFollower(
            self.client,
            self.session,
            listener,
            tail_lines=self.settings.log_tail_lines,
            reconnect_delay=self.settings.log_reconnect_delay,
            dedup_window=self.settings.log_buffer_length,
        )

    def _load_settings(self) -> None:
        """Load application settings from persistent storage."""
        try:
            self.settings = ConfigManager.load()
        except ConfigLoadError as exc:
            # Use defaults if loading fails
            logger.warning("Using default settings: %s", exc)
            self.settings = AppSettings()
            return
        if not ConfigManager.settings_path().exists():
            try:
                ConfigManager.save(self.settings)
            except ConfigSaveError as exc:
                logger.debug("Cannot write default settings: %s", exc)

    def on_mount(self) -> None:
        """Called when app is mounted."""
        self._build_dashboard()
        self.push_screen(self.dashboard)
        self.start_dashboard(discover=True)

    async def on_unmount(self) -> None:
        self.session.cancellations.run_all()
        await self.client.aclose()

    # =========================================================================
    # Dashboard lifecycle
    # =========================================================================

    def start_dashboard(self, *, discover: bool = False) -> None:
        """(Re)start the watch of the current namespace in a worker."""
        self.run_worker(
            self._start_dashboard(discover=discover),
            name="dashboard-start",
            group="dashboard",
            exclusive=True,
        )

    async def _start_dashboard(self, *, discover: bool = False) -> None:
        if discover:
            await self.client.discover_apis()
        namespace = self.session.namespace
        self.sub_title = f"{self.client.base_url}  {namespace}"
        try:
            await self.watcher.start(namespace)
        except KubikError as exc:
            logger.error("Cannot watch pods in namespace %s: %s", namespace, exc)
            self.notify(
                self.dashboard.presenter.friendly_error(exc),
                title=f"Namespace {namespace}",
                severity="error",
            )

    async def prompt_credentials(self) -> Credentials:
        """Ask the user for credentials through the login modal.

        Raises:
            AuthenticationFailed: When the user cancels the prompt.
        """
        future: asyncio.Future[Credentials | None] = asyncio.get_running_loop().create_future()

        def on_dismiss(result: Credentials | None) -> None:
            if not future.done():
                future.set_result(result)

        self.push_screen(CredentialsScreen(self.client.base_url, self._last_username), on_dismiss)
        credentials = await future
        if credentials is None:
            raise AuthenticationFailed("Login cancelled")
        self._last_username = credentials.username
        return credentials

    # =========================================================================
    # Pod selection
    # =========================================================================

    def on_pod_selected(self, message: PodSelected) -> None:
        message.stop()
        if not self.session.select_pod(message.pod_name):
            return
        self.dashboard.show_selection(message.pod_name)
        self.run_worker(
            self._follow_log(message.pod_name),
            name=f"log-follow:{message.pod_name}",
            group="logs",
        )

    async def _follow_log(self, pod_name: str) -> None:
        try:
            await self.log_follower.start(pod_name, self.session.namespace)
        except KubikError as exc:
            if self.session.selected_pod != pod_name:
                return
            logger.error("Cannot follow log of pod %s: %s", pod_name, exc)
            self.notify(
                self.dashboard.presenter.friendly_error(exc),
                title=f"Logs {pod_name}",
                severity="error",
            )

    # =========================================================================
    # Actions
    # =========================================================================

    def action_select_namespace(self) -> None:
        """Open the namespace selection modal."""
        if isinstance(self.screen, NamespaceSelectScreen):
            return
        self.run_worker(
            self._select_namespace(),
            name="namespaces",
            group="namespaces",
            exclusive=True,
        )

    async def _select_namespace(self) -> None:
        try:
            namespaces = await self.client.list_namespaces()
        except KubikError as exc:
            logger.error("Cannot list namespaces: %s", exc)
            self.notify(
                self.dashboard.presenter.friendly_error(exc),
                title="Namespaces",
                severity="error",
            )
            return
        self.session.namespaces = namespaces
        self.push_screen(
            NamespaceSelectScreen(namespaces, self.session.namespace),
            self.switch_namespace,
        )

    def switch_namespace(self, namespace: str | None) -> None:
        """Tear down the current namespace and watch `namespace` instead."""
        if not namespace or namespace == self.session.namespace:
            return
        self.watcher.stop()
        self.session.switch_namespace(namespace)
        self.dashboard.show_selection(None)
        self.start_dashboard()

    def action_login(self) -> None:
        """Run the login flow and restart the dashboard with the new token."""
        self.run_worker(self._login(), name="login", group="login", exclusive=True)

    async def _login(self) -> None:
        try:
            await self.client.authenticate()
        except AuthenticationFailed as exc:
            logger.warning("Login failed: %s", exc)
            self.notify(str(exc), title="Log In", severity="warning")
            return
        except KubikError as exc:
            logger.error("Login failed: %s", exc)
            self.notify(
                self.dashboard.presenter.friendly_error(exc),
                title="Log In",
                severity="error",
            )
            return
        self.watcher.stop()
        self.session.clear_selection()
        self.dashboard.show_selection(None)
        self.start_dashboard()

    def action_toggle_debug(self) -> None:
        self.dashboard.toggle_debug()
