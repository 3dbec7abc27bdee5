from __future__ import annotations

from devsetup.env import RunnerConfig
from devsetup.model import Step
from . import common as sec
from .mcp import MCP_SERVERS, add_server, check_claude
from .node import (
    NpmTool,
    install_node,
    install_npm_tool,
    install_nvm,
    load_nvm,
    nvm_version,
    tool_version,
    verify_node,
)
from .python import install_python, install_uv, load_uv, uv_version, verify_python
from .shell import configure_aliases
from .system import (
    check_dnf,
    dnf_command,
    ensure_curl,
    install_jdk,
    install_package,
    update_packages,
)

LOAD_NVM = "Loading NVM into current shell"
LOAD_UV = "Loading uv into current shell"
CHECK_CLAUDE = "Checking Claude CLI availability"

NPM_TOOLS: tuple[NpmTool, ...] = (
    NpmTool("pnpm", "pnpm", "pnpm", sec.NODE),
    NpmTool("gitmoji-cli", "gitmoji", "gitmoji-cli", sec.NODE),
    NpmTool("@anthropic-ai/claude-code", "claude", "Claude CLI", sec.AI_TOOLS),
    NpmTool("@openai/codex", "codex", "Codex CLI", sec.AI_TOOLS),
    NpmTool("@google/gemini-cli", "gemini", "Gemini CLI", sec.AI_TOOLS),
)


def _git_version(config: RunnerConfig) -> list[str]:
    return ["git", "--version"]


def steps() -> list[Step]:
    out: list[Step] = [
        Step(
            name="Checking DNF availability",
            action=check_dnf,
            required=True,
            section=sec.SYSTEM,
            description="dnf must be on PATH (Rocky Linux)",
        ),
        Step(
            name="Determining DNF command (sudo or root)",
            action=dnf_command,
            section=sec.SYSTEM,
            description="sudo dnf unless running as root",
        ),
        Step(
            name="Updating system packages",
            action=update_packages,
            section=sec.SYSTEM,
            description="dnf -y update",
        ),
        Step(
            name="Installing Git",
            action=install_package("git", "Git"),
            section=sec.SYSTEM,
            version=_git_version,
        ),
        Step(
            name="Ensuring curl is available",
            action=ensure_curl,
            section=sec.SYSTEM,
            description="dnf install only when curl is missing",
        ),
        Step(
            name="Installing lsof (List open files utility)",
            action=install_package("lsof", "lsof"),
            section=sec.SYSTEM,
        ),
        Step(
            name="Installing NVM (Node Version Manager)",
            action=install_nvm,
            section=sec.NODE,
            description="nvm install.sh piped into bash",
        ),
        Step(
            name=LOAD_NVM,
            action=load_nvm,
            section=sec.NODE,
            description="$NVM_DIR/nvm.sh must exist and be non-empty",
            version=nvm_version,
        ),
        Step(
            name="Installing Node.js",
            action=install_node,
            section=sec.NODE,
            description="nvm install, use and alias default",
            depends_on=LOAD_NVM,
        ),
        Step(
            name="Verifying Node.js installation",
            action=verify_node,
            section=sec.NODE,
            depends_on=LOAD_NVM,
        ),
    ]

    for tool in NPM_TOOLS:
        out.append(
            Step(
                name=f"Installing {tool.label} ({tool.package})",
                action=install_npm_tool(tool),
                section=tool.section,
                description=f"npm install -g {tool.package}",
                version=tool_version(tool),
                depends_on=LOAD_NVM,
            )
        )

    out += [
        Step(
            name="Installing uv (Python package manager)",
            action=install_uv,
            section=sec.PYTHON,
            description="astral.sh installer via curl or wget",
        ),
        Step(
            name=LOAD_UV,
            action=load_uv,
            section=sec.PYTHON,
            description="uv must be on PATH",
            version=uv_version,
        ),
        Step(
            name="Installing Python via uv",
            action=install_python,
            section=sec.PYTHON,
            depends_on=LOAD_UV,
        ),
        Step(
            name="Verifying Python installation",
            action=verify_python,
            section=sec.PYTHON,
            description="looks for the version in uv python list",
            depends_on=LOAD_UV,
        ),
        Step(
            name="Installing OpenJDK",
            action=install_jdk,
            section=sec.JAVA,
        ),
        Step(
            name=CHECK_CLAUDE,
            action=check_claude,
            section=sec.MCP,
            description="MCP servers are added only when claude resolves",
        ),
    ]

    for server in MCP_SERVERS:
        out.append(
            Step(
                name=f"Adding {server.label} MCP server",
                action=add_server(server),
                section=sec.MCP,
                description=server.summary,
                depends_on=CHECK_CLAUDE,
            )
        )

    out.append(
        Step(
            name="Configuring .bashrc aliases",
            action=configure_aliases,
            section=sec.SHELL,
            description="appends alias ll once",
        )
    )
    return out


def next_steps(config: RunnerConfig) -> list[str]:
    v = config.python_version
    lines = [
        "Next steps:",
        "  1. Restart your terminal or run: source ~/.bashrc",
        "  2. Verify installations:",
        "     - node --version",
        "     - npm --version",
    ]
    lines += [f"     - {t.binary} --version" for t in NPM_TOOLS]
    lines += [
        "     - uv --version",
        "     - uv python list",
        "     - java --version",
        "  3. Verify Claude MCP servers:",
        "     - claude mcp list",
        f"  4. To use Python {v} with uv:",
        f"     - uv run --python {v} python --version",
        f"     - uv venv --python {v}",
        "",
        "MCP Servers Configured:",
    ]
    lines += [f"  - {s.name}: {s.summary}" for s in MCP_SERVERS]
    return lines
