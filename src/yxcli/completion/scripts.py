"""Shell completion script templates; each delegates to ``yx __complete``."""

from __future__ import annotations

from typing import Final

from yxcli.constants import COMPLETE_COMMAND, PROGRAM_NAME

_BASH_TEMPLATE: Final[str] = """\
# {prog} bash completion - eval "$({prog} completion bash)"
_{prog}_completion() {{
    local cur="${{COMP_WORDS[COMP_CWORD]}}"
    local args=()
    local i
    for ((i=1; i<COMP_CWORD; i++)); do
        args+=("${{COMP_WORDS[i]}}")
    done
    args+=("$cur")

    local out
    out="$({prog} {complete} "${{args[@]}}" 2>/dev/null)" || return

    COMPREPLY=()
    while IFS= read -r line; do
        [[ -n "$line" ]] && COMPREPLY+=("$line")
    done <<< "$out"
}}
complete -F _{prog}_completion {prog}
"""

_ZSH_TEMPLATE: Final[str] = """\
#compdef {prog}
# {prog} zsh completion - eval "$({prog} completion zsh)"
_{prog}_completion() {{
    local -a args
    local i
    for ((i=2; i<CURRENT; i++)); do
        args+=("${{words[i]}}")
    done
    args+=("${{words[CURRENT]}}")

    local -a suggestions
    suggestions=("${{(@f)$({prog} {complete} "${{args[@]}}" 2>/dev/null)}}")
    compadd -a suggestions
}}
compdef _{prog}_completion {prog}
"""

_FISH_TEMPLATE: Final[str] = """\
# {prog} fish completion - {prog} completion fish > ~/.config/fish/completions/{prog}.fish
function __{prog}_complete
    set -l tokens (commandline -opc)
    set -e tokens[1]
    {prog} {complete} $tokens (commandline -ct) 2>/dev/null
end
complete -c {prog} -f -a '(__{prog}_complete)'
"""

_POWERSHELL_TEMPLATE: Final[str] = """\
# {prog} PowerShell completion
Register-ArgumentCompleter -Native -CommandName {prog} -ScriptBlock {{
    param($wordToComplete, $commandAst, $cursorPosition)
    $words = @()
    foreach ($element in ($commandAst.CommandElements | Select-Object -Skip 1)) {{
        $words += $element.Extent.Text
    }}
    if ($wordToComplete -eq '') {{ $words += '' }}
    & {prog} {complete} @words 2>$null | ForEach-Object {{
        if (-not [string]::IsNullOrWhiteSpace($_)) {{
            [System.Management.Automation.CompletionResult]::new($_, $_, 'ParameterValue', $_)
        }}
    }}
}}
"""

_TEMPLATES: Final[dict[str, str]] = {
    "bash": _BASH_TEMPLATE,
    "zsh": _ZSH_TEMPLATE,
    "fish": _FISH_TEMPLATE,
    "powershell": _POWERSHELL_TEMPLATE,
}

SUPPORTED_SHELLS: Final[tuple[str, ...]] = tuple(_TEMPLATES)


def completion_script(shell: str, prog: str = PROGRAM_NAME) -> str:
    """Render the completion script for ``shell``."""

    template = _TEMPLATES.get(shell)
    if template is None:
        raise ValueError(f"unsupported shell: {shell}")
    return template.format(prog=prog, complete=COMPLETE_COMMAND)


__all__ = ["SUPPORTED_SHELLS", "completion_script"]
