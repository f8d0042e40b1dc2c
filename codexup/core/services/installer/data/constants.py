"""
L0 Data — Installer constants.

Package names, registry endpoints, timeouts and bundled template
locations shared across layers.
"""

from __future__ import annotations

# ── Packages ─────────────────────────────────────────────────────

CODEX_PACKAGE = "@openai/codex"
CODEX_BIN = "codex"

SELF_PACKAGE = "codex-1up"

# ── Registries ───────────────────────────────────────────────────

NPM_REGISTRY_LATEST = "https://registry.npmjs.org/{package}/latest"
PYPI_PROJECT_JSON = "https://pypi.org/pypi/{package}/json"

# Direct registry fetch is the fast path; the CLI fallback honours
# proxy/npmrc configuration but is slower.
FETCH_TIMEOUT_S = 1.5
CLI_FALLBACK_TIMEOUT_S = 8
PROBE_TIMEOUT_S = 10

USER_AGENT = "codex-1up/1.0"

# ── Bundled templates (relative to the templates dir) ─────────────

CONFIG_TEMPLATE = "codex-config.toml"
NOTIFY_TEMPLATE = "notification.sh"
AGENTS_TEMPLATES_DIR = "agent-templates"
AGENTS_TEMPLATE_FMT = "AGENTS-{name}.md"
SKILLS_TEMPLATES_DIR = "skills"

# ── Node bootstrap ───────────────────────────────────────────────

NVM_INSTALL_URL = "https://raw.githubusercontent.com/nvm-sh/nvm/v0.39.7/install.sh"
HOMEBREW_INSTALL_URL = "https://raw.githubusercontent.com/Homebrew/install/HEAD/install.sh"
