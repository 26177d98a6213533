"""Tests for the module graph session."""

import asyncio

import pytest

from modgraph.models.graph import VisibilitySettings
from modgraph.session import ModuleGraphSession

ROOT = "/root"

MAIN = "/root/src/main.ts"
APP = "/root/src/App.vue"
BUTTON = "/root/src/components/Button.tsx"
FORMAT = "/root/src/utils/format.ts"
HOME = "/root/src/pages/Home.tsx"


def node_ids(session: ModuleGraphSession) -> list[str]:
    return [n.id for n in session.nodes]


class TestIngest:
    """Tests for ingest."""

    def test_ingest_builds_graph(self, session: ModuleGraphSession, app_modules: list[dict]) -> None:
        """Ingest fills the registry and rebuilds."""
        graph = session.ingest(app_modules, ROOT)

        assert session.root == ROOT
        assert len(session.registry) == 8
        assert graph is session.graph
        assert node_ids(session) == [MAIN, APP, BUTTON, FORMAT, HOME]

    def test_ingest_replaces_previous_data(
        self, session: ModuleGraphSession, app_modules: list[dict], scenario_modules: list[dict]
    ) -> None:
        """A second ingest starts from scratch."""
        session.ingest(app_modules, ROOT)
        session.ingest(scenario_modules, ROOT)

        assert len(session.registry) == 2
        assert node_ids(session) == ["/root/a.ts", "/root/b.ts"]

    def test_ingest_none(self, session: ModuleGraphSession) -> None:
        """A missing module list empties the graph."""
        session.ingest(None, ROOT)

        assert len(session.registry) == 0
        assert session.nodes == []

    def test_ingest_closes_drawer(self, session: ModuleGraphSession, app_modules: list[dict]) -> None:
        """Ingest drops the selected module."""
        session.ingest(app_modules, ROOT)
        session.select_node(MAIN)

        session.ingest(app_modules, ROOT)

        assert not session.drawer_open


class TestViewState:
    """Tests for settings, filter root and search."""

    def test_settings_rebuild_synchronously(
        self, session: ModuleGraphSession, app_modules: list[dict]
    ) -> None:
        """Changing a toggle updates the graph right away."""
        session.ingest(app_modules, ROOT)

        session.set_visibility_settings({"show_vendor": True})

        assert len(session.nodes) == 7
        assert session.settings == VisibilitySettings(show_vendor=True)

    def test_partial_settings_merge(self, session: ModuleGraphSession, app_modules: list[dict]) -> None:
        """Unspecified toggles keep their values."""
        session.ingest(app_modules, ROOT)
        session.set_visibility_settings({"show_vendor": True})

        session.set_visibility_settings({"show_virtual": True})

        assert session.settings.show_vendor is True
        assert session.settings.show_virtual is True
        assert session.settings.show_out_of_root is False

    def test_legacy_setting_names(self, session: ModuleGraphSession, app_modules: list[dict]) -> None:
        """The build-tool UI toggle names are accepted."""
        session.ingest(app_modules, ROOT)

        session.set_visibility_settings({"node_modules": True, "virtual": True, "lib": True})

        assert session.settings == VisibilitySettings(
            show_vendor=True, show_virtual=True, show_out_of_root=True
        )

    def test_unknown_setting_raises(self, session: ModuleGraphSession) -> None:
        """Unknown toggle names are rejected."""
        with pytest.raises(ValueError):
            session.set_visibility_settings({"show_everything": True})

    def test_settings_survive_ingest(self, session: ModuleGraphSession, app_modules: list[dict]) -> None:
        """View settings are kept across ingests."""
        session.set_visibility_settings({"show_vendor": True})
        session.ingest(app_modules, ROOT)

        assert len(session.nodes) == 7

    def test_filter_root(self, session: ModuleGraphSession, app_modules: list[dict]) -> None:
        """Filtering isolates one module's closure; empty clears it."""
        session.ingest(app_modules, ROOT)

        session.set_filter_root(BUTTON)
        assert node_ids(session) == [BUTTON, FORMAT]

        session.set_filter_root("")
        assert len(session.nodes) == 5

    def test_filter_root_is_normalized(self, session: ModuleGraphSession, app_modules: list[dict]) -> None:
        """Query strings on the filter root are stripped."""
        session.ingest(app_modules, ROOT)

        session.set_filter_root(BUTTON + "?t=123")

        assert session.filter_root == BUTTON
        assert node_ids(session) == [BUTTON, FORMAT]

    def test_search_without_loop_is_immediate(
        self, session: ModuleGraphSession, app_modules: list[dict]
    ) -> None:
        """Outside an event loop a search rebuilds right away."""
        session.ingest(app_modules, ROOT)

        session.set_search_text("button")

        assert node_ids(session) == [BUTTON, FORMAT]


class TestDebouncedSearch:
    """Search rebuilds on a running event loop."""

    @pytest.mark.asyncio
    async def test_search_waits_for_quiet_period(
        self, session: ModuleGraphSession, app_modules: list[dict]
    ) -> None:
        """Typing does not rebuild until input stops."""
        session.ingest(app_modules, ROOT)

        for text in ("b", "bu", "but", "button"):
            session.set_search_text(text)
            await asyncio.sleep(0.01)

        assert len(session.nodes) == 5
        await asyncio.sleep(0.15)
        assert node_ids(session) == [BUTTON, FORMAT]

    @pytest.mark.asyncio
    async def test_flush(self, session: ModuleGraphSession, app_modules: list[dict]) -> None:
        """flush applies a pending search immediately."""
        session.ingest(app_modules, ROOT)
        session.set_search_text("button")

        graph = session.flush()

        assert [n.id for n in graph.nodes] == [BUTTON, FORMAT]
        assert not session.scheduler.pending

    @pytest.mark.asyncio
    async def test_ingest_cancels_pending_search(
        self, session: ModuleGraphSession, app_modules: list[dict]
    ) -> None:
        """Ingest rebuilds with the latest search and drops the pending timer."""
        session.set_search_text("button")
        session.ingest(app_modules, ROOT)

        assert not session.scheduler.pending
        assert node_ids(session) == [BUTTON, FORMAT]

    @pytest.mark.asyncio
    async def test_pending_rebuild_closes_drawer(
        self, session: ModuleGraphSession, app_modules: list[dict]
    ) -> None:
        """A debounced rebuild closes an open drawer."""
        session.ingest(app_modules, ROOT)
        session.set_search_text("button")
        session.select_node(BUTTON)
        assert session.drawer_open

        await asyncio.sleep(0.15)

        assert not session.drawer_open


class TestDrawer:
    """Tests for select_node."""

    def test_select_known_module(self, session: ModuleGraphSession, app_modules: list[dict]) -> None:
        """The drawer shows visible deps and referencing modules."""
        session.ingest(app_modules, ROOT)

        record = session.select_node(BUTTON)

        assert record is not None
        assert session.drawer is record
        assert record.name == "Button.tsx"
        assert record.display_path == "/src/components/Button.tsx"
        assert record.path == BUTTON
        assert [(d.path, d.display_path) for d in record.deps] == [
            (FORMAT, "/src/utils/format.ts")
        ]
        assert [(r.path, r.display_path) for r in record.refs] == [
            (APP, "/src/App.vue"),
            (HOME, "/src/pages/Home.tsx"),
        ]

    def test_hidden_deps_are_left_out(self, session: ModuleGraphSession, app_modules: list[dict]) -> None:
        """Vendor and virtual deps are omitted under default settings."""
        session.ingest(app_modules, ROOT)

        record = session.select_node(MAIN)

        assert [d.path for d in record.deps] == [APP]
        assert record.refs == []

    def test_hidden_referencer_follows_settings(
        self, session: ModuleGraphSession, app_modules: list[dict]
    ) -> None:
        """A virtual referencer shows only with show_virtual."""
        session.ingest(app_modules, ROOT)
        assert session.select_node(HOME).refs == []

        session.set_visibility_settings({"show_virtual": True})

        assert [r.path for r in session.select_node(HOME).refs] == ["virtual:routes"]

    def test_select_unknown_module(self, session: ModuleGraphSession, app_modules: list[dict]) -> None:
        """Unknown ids leave the drawer closed."""
        session.ingest(app_modules, ROOT)

        assert session.select_node("/root/nope.ts") is None
        assert not session.drawer_open

    def test_settings_change_closes_drawer(
        self, session: ModuleGraphSession, app_modules: list[dict]
    ) -> None:
        """Every rebuild closes the drawer."""
        session.ingest(app_modules, ROOT)
        session.select_node(MAIN)

        session.set_visibility_settings({"show_vendor": True})

        assert not session.drawer_open

    def test_close_drawer(self, session: ModuleGraphSession, app_modules: list[dict]) -> None:
        session.ingest(app_modules, ROOT)
        session.select_node(MAIN)

        session.close_drawer()

        assert session.drawer is None


class TestReset:
    """Tests for reset."""

    def test_reset_clears_data_keeps_settings(
        self, session: ModuleGraphSession, app_modules: list[dict]
    ) -> None:
        """Reset drops modules and the graph but not the toggles."""
        session.set_visibility_settings({"show_vendor": True})
        session.ingest(app_modules, ROOT)
        session.select_node(MAIN)

        session.reset()

        assert len(session.registry) == 0
        assert session.root == ""
        assert session.nodes == []
        assert session.edges == []
        assert not session.drawer_open
        assert session.settings.show_vendor is True
