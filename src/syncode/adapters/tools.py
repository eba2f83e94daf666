"""Built-in tool descriptors.

Each entry is pure data: where the tool keeps its configuration on every
platform, which entries under that root are synced, and how. Tools whose
root holds caches or foreign files link entry by entry; tools that own
their whole directory link the root in one step.
"""

from __future__ import annotations

from syncode.core.schema import Platform, SyncStrategy, ToolDescriptor

_MAC_SUPPORT = "~/Library/Application Support"


def _editor_paths(app: str) -> dict[Platform, tuple[str, ...]]:
    """Per-platform User directory of a VS Code family editor."""
    return {
        Platform.macos: (f"{_MAC_SUPPORT}/{app}/User",),
        Platform.linux: (f"~/.config/{app}/User",),
        Platform.windows: (f"{{appdata}}/{app}/User",),
    }


def _editor_markers(app: str) -> tuple[str, ...]:
    # User/ appears only after first launch
    return (f"{_MAC_SUPPORT}/{app}", f"~/.config/{app}", f"{{appdata}}/{app}")


BUILTIN_TOOLS: tuple[ToolDescriptor, ...] = (
    ToolDescriptor(
        id="agents",
        name="Shared Agents",
        entries=("skills",),
        default_system_paths=("~/.agents",),
    ),
    ToolDescriptor(
        id="amp",
        name="Amp",
        link_root=True,
        default_system_paths=("~/.config/amp",),
    ),
    ToolDescriptor(
        id="antigravity",
        name="Antigravity",
        link_root=True,
        default_system_paths=("~/.gemini/antigravity",),
        detect_markers=("{cwd}/.agent",),
    ),
    ToolDescriptor(
        id="claude",
        name="Claude Code",
        # Root also holds cache and history
        export_strategy=SyncStrategy.copy,
        entries=("settings.json", "CLAUDE.md", "commands", "skills"),
        system_paths={Platform.windows: ("{appdata}/claude",)},
        default_system_paths=("~/.claude",),
        skills_subpath="skills",
    ),
    ToolDescriptor(
        id="clawdbot",
        name="Clawdbot",
        link_root=True,
        default_system_paths=("~/.clawd", "~/.clawdbot"),
    ),
    ToolDescriptor(
        id="codex",
        name="Codex",
        link_root=True,
        default_system_paths=("~/.codex",),
        skills_subpath="skills",
        shared_skills=True,
    ),
    ToolDescriptor(
        id="cursor",
        name="Cursor",
        entries=("settings.json", "keybindings.json", "snippets", ".cursorrules"),
        system_paths=_editor_paths("Cursor"),
        detect_markers=_editor_markers("Cursor"),
        skills_subpath="skills",
        shared_skills=True,
    ),
    ToolDescriptor(
        id="devin",
        name="Devin",
        link_root=True,
        system_paths={Platform.windows: ("{appdata}/devin",)},
        default_system_paths=("~/.devin", "~/.config/devin"),
        skills_subpath="skills",
        shared_skills=True,
    ),
    ToolDescriptor(
        id="droid",
        name="Droid",
        link_root=True,
        default_system_paths=("~/.factory",),
    ),
    ToolDescriptor(
        id="gemini-cli",
        name="Gemini CLI",
        # ~/.gemini also hosts Antigravity
        entries=("settings.json", "GEMINI.md", "commands"),
        default_system_paths=("~/.gemini",),
        skills_subpath="skills",
        shared_skills=True,
    ),
    ToolDescriptor(
        id="github-copilot",
        name="GitHub Copilot",
        link_root=True,
        default_system_paths=("~/.copilot",),
        detect_markers=("{cwd}/.github",),
    ),
    ToolDescriptor(
        id="goose",
        name="Goose",
        link_root=True,
        default_system_paths=("~/.config/goose",),
    ),
    ToolDescriptor(
        id="kilo",
        name="Kilo Code",
        link_root=True,
        default_system_paths=("~/.kilocode",),
    ),
    ToolDescriptor(
        id="kimi-cli",
        name="Kimi CLI",
        link_root=True,
        system_paths={Platform.windows: ("{appdata}/kimi",)},
        default_system_paths=("~/.kimi", "~/.config/kimi"),
        skills_subpath="skills",
        shared_skills=True,
    ),
    ToolDescriptor(
        id="kiro-cli",
        name="Kiro CLI",
        link_root=True,
        default_system_paths=("~/.kiro",),
    ),
    ToolDescriptor(
        id="opencode",
        name="OpenCode",
        link_root=True,
        entries=("opencode.json", "command", "agent", "skill"),
        system_paths={Platform.windows: ("{appdata}/opencode",)},
        default_system_paths=("~/.config/opencode",),
        skills_subpath="skill",
        shared_skills=True,
    ),
    ToolDescriptor(
        id="roo",
        name="Roo Code",
        link_root=True,
        default_system_paths=("~/.roo",),
    ),
    ToolDescriptor(
        id="trae",
        name="Trae",
        link_root=True,
        default_system_paths=("~/.trae",),
    ),
    ToolDescriptor(
        id="vscode",
        name="Visual Studio Code",
        entries=("settings.json", "keybindings.json", "snippets", "tasks.json", "launch.json"),
        system_paths=_editor_paths("Code"),
        detect_markers=_editor_markers("Code"),
        skills_subpath="skills",
        shared_skills=True,
    ),
    ToolDescriptor(
        id="windsurf",
        name="Windsurf",
        entries=("settings.json", "mcp_config.json", "rules"),
        default_system_paths=("~/.codeium/windsurf",),
        skills_subpath="rules",
    ),
)


def builtin_tool_ids() -> list[str]:
    return [d.id for d in BUILTIN_TOOLS]
