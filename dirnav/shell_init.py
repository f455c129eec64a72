"""Shell integration snippets for bash, zsh, and fish.

A child process cannot change its parent's working directory, so the
snippets wrap the CLI: navigation commands print the destination and the
shell function performs the ``cd``. A prompt hook reports the working
directory after every command.
"""

from __future__ import annotations

from pygments import highlight
from pygments.formatters import TerminalFormatter
from pygments.lexers import get_lexer_by_name

from .errors import InvalidArgument

_POSIX_FUNCTIONS = """\
_dirnav_cd() {{
    local target
    target="$(command {prog} "$@")" || return $?
    [ -n "$target" ] && builtin cd -- "$target"
}}
n() {{ _dirnav_cd next; }}
p() {{ _dirnav_cd previous; }}
goto() {{ _dirnav_cd goto "$@"; }}
list-history() {{ command {prog} list-history; }}
_dirnav_record() {{
    local rc=$?
    command {prog} record "$PWD"
    return $rc
}}
"""

_BASH_HOOK = """\
if [[ ";${{PROMPT_COMMAND:-}};" != *";_dirnav_record;"* ]]; then
    PROMPT_COMMAND="_dirnav_record${{PROMPT_COMMAND:+;$PROMPT_COMMAND}}"
fi
"""

_ZSH_HOOK = """\
autoload -Uz add-zsh-hook
add-zsh-hook precmd _dirnav_record
"""

_FISH_SCRIPT = """\
function _dirnav_cd
    set -l target (command {prog} $argv)
    or return $status
    test -n "$target"; and builtin cd -- $target
end
function n; _dirnav_cd next; end
function p; _dirnav_cd previous; end
function goto; _dirnav_cd goto $argv; end
function list-history; command {prog} list-history; end
function _dirnav_record --on-event fish_prompt
    command {prog} record $PWD
end
"""

SUPPORTED_SHELLS = ("bash", "zsh", "fish")


def render_init_script(shell: str, prog: str = "dirnav") -> str:
    """Return the integration snippet for ``shell`` invoking ``prog``."""
    if shell == "bash":
        return _POSIX_FUNCTIONS.format(prog=prog) + _BASH_HOOK
    if shell == "zsh":
        return _POSIX_FUNCTIONS.format(prog=prog) + _ZSH_HOOK
    if shell == "fish":
        return _FISH_SCRIPT.format(prog=prog)
    raise InvalidArgument(f"unsupported shell: {shell!r} (expected one of {', '.join(SUPPORTED_SHELLS)})")


def highlight_script(source: str, shell: str, style: str = "monokai") -> str:
    """Colorize a shell snippet for terminal output."""
    lexer = get_lexer_by_name(shell)
    return highlight(source, lexer, TerminalFormatter(style=style))
