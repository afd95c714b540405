"""Integration tests for the MCP server end-to-end flow."""

from __future__ import annotations

from pathlib import Path

from schematic_router.server import create_server

HEATING_PATH = Path(__file__).parent.parent / "fixtures" / "heating_system.json"


class TestServerCreation:
    def test_create_server(self) -> None:
        server = create_server()
        assert server is not None
        assert server.name == "schematic-router"


class TestEndToEnd:
    """Test the full flow: load diagram -> route -> inspect routes."""

    def test_load_route_inspect(self) -> None:
        from schematic_router import state
        from schematic_router.tools import TOOL_REGISTRY

        state.clear()
        try:
            result = TOOL_REGISTRY["load_diagram"].handler(diagram_path=str(HEATING_PATH))
            assert result["status"] == "ok"
            assert "heating_system.json" in result["message"]
            assert result["summary"]["instance_count"] == 19

            routed = TOOL_REGISTRY["route_diagram"].handler()
            assert routed["status"] == "ok"
            assert routed["result"]["route_count"] == 22

            found = TOOL_REGISTRY["get_route"].handler(key="boiler:T->v1:AB")
            assert found["found"] is True
            assert found["route"]["kind"] == "supply"

            preview = TOOL_REGISTRY["preview_route"].handler(
                from_ref="outdoor:SIG", to_ref="aku:T"
            )
            assert preview["status"] == "preview"

            obstacles = TOOL_REGISTRY["list_obstacles"].handler(ignore=["aku", "dhw"])
            assert obstacles["count"] == 17
        finally:
            state.clear()
