from __future__ import annotations

import shlex
from dataclasses import dataclass

from devsetup.env import RunnerConfig
from devsetup.model import ActionResult
from devsetup.subproc import EXIT_NOT_FOUND
from .common import from_command, nvm_has, nvm_stream


@dataclass(frozen=True)
class McpServer:
    name: str
    label: str
    add_args: tuple[str, ...]
    summary: str


MCP_SERVERS: tuple[McpServer, ...] = (
    McpServer(
        name="sequential-thinking",
        label="Sequential Thinking",
        add_args=(
            "--scope",
            "user",
            "sequential-thinking",
            "npx",
            "@modelcontextprotocol/server-sequential-thinking",
        ),
        summary="Advanced reasoning and problem-solving",
    ),
    McpServer(
        name="gemini-cli",
        label="Gemini CLI",
        add_args=("gemini-cli", "--", "npx", "-y", "gemini-mcp-tool"),
        summary="Google Gemini AI integration",
    ),
    McpServer(
        name="codex-cli-mcp-tool",
        label="Codex CLI",
        add_args=("codex-cli-mcp-tool", "--", "npx", "-y", "codex-cli-mcp-tool"),
        summary="OpenAI Codex integration",
    ),
    McpServer(
        name="context7",
        label="Context7",
        add_args=("--transport", "http", "context7", "https://mcp.context7.com/mcp"),
        summary="Up-to-date library documentation",
    ),
    McpServer(
        name="chrome-devtools",
        label="Chrome DevTools",
        add_args=("chrome-devtools", "--", "npx", "-y", "chrome-devtools-mcp"),
        summary="Browser automation and testing",
    ),
)


def check_claude(config: RunnerConfig) -> ActionResult:
    if not nvm_has(config, "claude"):
        return ActionResult(
            ok=False,
            detail=(
                "Claude CLI not found - skipping MCP server configuration. "
                "Install Claude CLI first, then run MCP setup manually"
            ),
            exit_code=EXIT_NOT_FOUND,
        )
    return ActionResult(ok=True, detail="Claude CLI available")


def add_command(server: McpServer) -> str:
    return shlex.join(["claude", "mcp", "add", *server.add_args])


def add_server(server: McpServer):
    def action(config: RunnerConfig) -> ActionResult:
        return from_command(
            nvm_stream(config, add_command(server)),
            f"{server.label} MCP server added",
            f"Failed to add {server.label} MCP server",
        )

    return action
