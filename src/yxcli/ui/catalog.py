"""
yx-cli - remote command catalog

File: src/yxcli/ui/catalog.py

Purpose
- Declare the remote API command groups (``auth``, ``api``, ``org``, ``pr``, ``repo``,
  ``issue``, ``pipeline``) as plain data, so the argparse router and the completion
  tree are built from one source.

Non-functional requirements
- Declarations only; execution belongs to the remote API client.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class OptionDecl:
    """One option; ``metavar`` set means the option takes a value."""

    flags: tuple[str, ...]
    help: str
    metavar: str | None = None
    repeatable: bool = False


@dataclass(frozen=True, slots=True)
class CommandDecl:
    name: str
    help: str
    arguments: tuple[str, ...] = ()
    options: tuple[OptionDecl, ...] = ()
    children: tuple[CommandDecl, ...] = ()


def _value(*flags: str, metavar: str, help: str, repeatable: bool = False) -> OptionDecl:
    return OptionDecl(flags=flags, help=help, metavar=metavar, repeatable=repeatable)


def _switch(*flags: str, help: str) -> OptionDecl:
    return OptionDecl(flags=flags, help=help)


ORG = _value("--org", metavar="ORG_ID", help="Organization ID")
PROJECT = _value("--project", metavar="PROJECT_ID", help="Project ID")
PAGE = _value("--page", metavar="N", help="Page number")
PER_PAGE = _value("--per-page", metavar="N", help="Items per page")
ORDER_BY = _value("--order-by", metavar="FIELD", help="Order field")
SORT = _value("--sort", metavar="DIRECTION", help="asc | desc")
WEB = _switch("--web", help="Open in browser")
DRY_RUN = _switch("--dry-run", help="Print the request or git commands without executing")
PAGING = (PAGE, PER_PAGE)

# Attached to every remote leaf command.
OUTPUT_OPTIONS: tuple[OptionDecl, ...] = (
    _value("--format", metavar="FORMAT", help="table | tsv | json"),
    _value("--out", metavar="PATH", help="Write output to file"),
    _switch("--json", help="Print raw JSON"),
)

PR_REF = ("repository_id", "local_id")
REPO_REF = ("repository",)
ISSUE_REF = ("issue_id",)


def _api_method(name: str) -> CommandDecl:
    return CommandDecl(
        name=name,
        help=f"Send a {name.upper()} request",
        arguments=("path",),
        options=(
            _value("--query", metavar="KEY=VALUE", help="Query parameter", repeatable=True),
            _value("--body", metavar="JSON", help="JSON body"),
        ),
    )


REMOTE_COMMANDS: tuple[CommandDecl, ...] = (
    CommandDecl(
        name="auth",
        help="Manage authentication",
        children=(
            CommandDecl(
                name="login",
                help="Store a personal access token",
                options=(
                    _value("--token", metavar="TOKEN", help="Personal access token"),
                    ORG,
                ),
            ),
            CommandDecl(name="status", help="Show authentication status"),
            CommandDecl(name="logout", help="Remove stored credentials"),
        ),
    ),
    CommandDecl(
        name="api",
        help="Call the OpenAPI directly",
        children=(
            CommandDecl(
                name="get",
                help="Send a GET request",
                arguments=("path",),
                options=(
                    _value("--query", metavar="KEY=VALUE", help="Query parameter", repeatable=True),
                ),
            ),
            _api_method("post"),
            _api_method("put"),
            _api_method("patch"),
            _api_method("delete"),
        ),
    ),
    CommandDecl(
        name="org",
        help="Organization and project context commands",
        children=(
            CommandDecl(name="current", help="Show the default organization"),
            CommandDecl(name="list", help="List organizations"),
            CommandDecl(name="members", help="List organization members", options=(ORG, *PAGING)),
            CommandDecl(
                name="projects",
                help="List projects",
                options=(
                    ORG,
                    _value("--name", metavar="KEYWORD", help="Project name keyword"),
                    _value("--status", metavar="STATUS", help="Status list, comma-separated"),
                    _value(
                        "--scenario", metavar="SCENARIO", help="manage | participate | favorite"
                    ),
                    ORDER_BY,
                    SORT,
                    *PAGING,
                ),
            ),
            CommandDecl(name="roles", help="List organization roles", options=(ORG,)),
            CommandDecl(name="use", help="Set the default organization", arguments=("org_id",)),
        ),
    ),
    CommandDecl(
        name="pr",
        help="Change request (merge request) commands",
        children=(
            CommandDecl(
                name="list",
                help="List change requests",
                options=(
                    ORG,
                    _value("--repo", metavar="IDS", help="Repository IDs, comma-separated"),
                    _value("--state", metavar="STATE", help="opened | merged | closed"),
                    _value("--search", metavar="KEYWORD", help="Search in title"),
                    ORDER_BY,
                    SORT,
                    *PAGING,
                ),
            ),
            CommandDecl(
                name="view",
                help="Show one change request",
                arguments=PR_REF,
                options=(ORG, _switch("--comments", help="Include comments"), WEB),
            ),
            CommandDecl(
                name="create",
                help="Open a change request",
                options=(
                    ORG,
                    _value("--repo", metavar="REPOSITORY_ID", help="Repository ID"),
                    _value("--title", metavar="TITLE", help="Title"),
                    _value("--source", metavar="BRANCH", help="Source branch"),
                    _value("--target", metavar="BRANCH", help="Target branch"),
                    _value("--description", metavar="TEXT", help="Description"),
                    _value("--reviewer", metavar="USER_ID", help="Reviewer", repeatable=True),
                    _switch("--draft", help="Open as draft"),
                ),
            ),
            CommandDecl(
                name="edit",
                help="Edit a change request",
                arguments=PR_REF,
                options=(
                    ORG,
                    _value("--title", metavar="TITLE", help="Title"),
                    _value("-b", "--body", metavar="TEXT", help="Body"),
                    _value("-F", "--body-file", metavar="PATH", help="Read body from file"),
                    _value("--base", metavar="BRANCH", help="Target branch"),
                ),
            ),
            CommandDecl(
                name="status",
                help="Show change requests relevant to you",
                options=(
                    ORG,
                    _value("--repo", metavar="IDS", help="Repository IDs, comma-separated"),
                    _value("-L", "--limit", metavar="N", help="Maximum per bucket"),
                ),
            ),
            CommandDecl(
                name="checkout",
                help="Check out a change request branch locally",
                arguments=PR_REF,
                options=(
                    ORG,
                    _value("--repo-dir", metavar="PATH", help="Local git repository path"),
                    _value("--remote", metavar="NAME", help="Git remote name"),
                    _value("--branch", metavar="NAME", help="Local branch name"),
                    _switch("--detach", help="Checkout detached HEAD"),
                    _switch("--draft", help="Mark the checkout as draft work"),
                    DRY_RUN,
                ),
            ),
            CommandDecl(
                name="merge",
                help="Merge a change request",
                arguments=PR_REF,
                options=(ORG, _switch("--delete-branch", help="Delete source branch")),
            ),
            CommandDecl(
                name="close", help="Close a change request", arguments=PR_REF, options=(ORG,)
            ),
            CommandDecl(
                name="reopen", help="Reopen a change request", arguments=PR_REF, options=(ORG,)
            ),
        ),
    ),
    CommandDecl(
        name="repo",
        help="Repository commands",
        children=(
            CommandDecl(
                name="list",
                help="List repositories",
                options=(
                    ORG,
                    _value("--search", metavar="KEYWORD", help="Search keyword"),
                    _switch("--archived", help="Include archived repositories"),
                    ORDER_BY,
                    SORT,
                    *PAGING,
                ),
            ),
            CommandDecl(
                name="view", help="Show one repository", arguments=REPO_REF, options=(ORG, WEB)
            ),
            CommandDecl(
                name="create",
                help="Create a repository",
                arguments=("name",),
                options=(
                    ORG,
                    _value("--description", metavar="TEXT", help="Repository description"),
                    _value("--visibility", metavar="LEVEL", help="private | internal | public"),
                    _switch("--clone", help="Clone locally after creation"),
                    DRY_RUN,
                ),
            ),
            CommandDecl(
                name="clone",
                help="Clone a repository",
                arguments=REPO_REF,
                options=(
                    ORG,
                    _value("--protocol", metavar="TYPE", help="auto | ssh | http | https"),
                    _value("--remote-name", metavar="NAME", help="Git remote name"),
                    DRY_RUN,
                ),
            ),
            CommandDecl(
                name="delete",
                help="Delete a repository",
                arguments=REPO_REF,
                options=(ORG, _value("--reason", metavar="TEXT", help="Delete reason")),
            ),
            CommandDecl(
                name="branch",
                help="Branch commands",
                children=(
                    CommandDecl(
                        name="list",
                        help="List branches",
                        arguments=REPO_REF,
                        options=(ORG, *PAGING),
                    ),
                    CommandDecl(
                        name="create",
                        help="Create a branch",
                        arguments=("repository", "branch"),
                        options=(ORG, _value("--ref", metavar="REF", help="Source ref")),
                    ),
                    CommandDecl(
                        name="delete",
                        help="Delete a branch",
                        arguments=("repository", "branch"),
                        options=(ORG,),
                    ),
                ),
            ),
        ),
    ),
    CommandDecl(
        name="issue",
        help="Issue commands",
        children=(
            CommandDecl(
                name="list",
                help="List issues",
                options=(
                    ORG,
                    PROJECT,
                    _value("-s", "--state", metavar="STATE", help="open | closed | all"),
                    _value("-a", "--assignee", metavar="USER_ID", help="Assignee, supports self"),
                    _value("-A", "--author", metavar="USER_ID", help="Author, supports self"),
                    _value("-l", "--label", metavar="NAME", help="Label filter", repeatable=True),
                    _value("-S", "--search", metavar="QUERY", help="Search query in title"),
                    _value("-L", "--limit", metavar="N", help="Maximum results"),
                    *PAGING,
                ),
            ),
            CommandDecl(
                name="view", help="Show one issue", arguments=ISSUE_REF, options=(ORG, WEB)
            ),
            CommandDecl(
                name="create",
                help="Create an issue",
                options=(
                    ORG,
                    PROJECT,
                    _value("-t", "--title", metavar="TITLE", help="Issue title"),
                    _value("-b", "--body", metavar="TEXT", help="Issue body"),
                    _value("-a", "--assignee", metavar="USER_ID", help="Assignee"),
                    _value("-l", "--label", metavar="NAME", help="Label", repeatable=True),
                ),
            ),
            CommandDecl(
                name="edit",
                help="Edit an issue",
                arguments=ISSUE_REF,
                options=(
                    ORG,
                    _value("-t", "--title", metavar="TITLE", help="Issue title"),
                    _value("-b", "--body", metavar="TEXT", help="Issue body"),
                    _value("-s", "--state", metavar="STATUS", help="Issue status"),
                ),
            ),
            CommandDecl(name="close", help="Close an issue", arguments=ISSUE_REF, options=(ORG,)),
            CommandDecl(name="reopen", help="Reopen an issue", arguments=ISSUE_REF, options=(ORG,)),
            CommandDecl(
                name="comment",
                help="Comment on an issue",
                arguments=ISSUE_REF,
                options=(ORG, _value("-b", "--body", metavar="TEXT", help="Comment body")),
            ),
        ),
    ),
    CommandDecl(
        name="pipeline",
        help="Pipeline commands",
        children=(
            CommandDecl(
                name="list",
                help="List pipelines",
                options=(
                    ORG,
                    _value("--name", metavar="NAME", help="Pipeline name"),
                    _value("--status", metavar="STATUS", help="Status list, comma-separated"),
                    *PAGING,
                ),
            ),
            CommandDecl(
                name="runs",
                help="List runs of a pipeline",
                arguments=("pipeline_id",),
                options=(ORG, _value("--status", metavar="STATUS", help="Run status"), *PAGING),
            ),
            CommandDecl(
                name="run",
                help="Start a pipeline run",
                arguments=("pipeline_id",),
                options=(
                    ORG,
                    _value("--params", metavar="JSON", help="Raw params JSON"),
                    _value("--branch", metavar="NAME", help="Branch", repeatable=True),
                ),
            ),
        ),
    ),
)


def iter_leaf_paths(
    commands: tuple[CommandDecl, ...] = REMOTE_COMMANDS, prefix: tuple[str, ...] = ()
) -> list[tuple[str, ...]]:
    """Every executable command path in ``commands``, depth first."""

    paths: list[tuple[str, ...]] = []
    for command in commands:
        path = (*prefix, command.name)
        if command.children:
            paths.extend(iter_leaf_paths(command.children, path))
        else:
            paths.append(path)
    return paths


__all__ = [
    "OUTPUT_OPTIONS",
    "REMOTE_COMMANDS",
    "CommandDecl",
    "OptionDecl",
    "iter_leaf_paths",
]
