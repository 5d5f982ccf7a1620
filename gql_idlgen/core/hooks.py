"""Post-render hooks for transforming generated modules.

A hook receives the path of each generated file (relative to the output
directory) and its rendered content, and returns the content to write.

Example usage:
    from gql_idlgen.core.hooks import AddHeaderHook, HookRunner

    hooks = HookRunner()
    hooks.add_post_hook(AddHeaderHook("# Generated by gql-idlgen. Do not edit."))
"""

from typing import Protocol, runtime_checkable


@runtime_checkable
class PostGenerateHook(Protocol):
    """Protocol for post-generation hooks.

    Example:
        class FormatWithBlack(PostGenerateHook):
            def post_generate(self, filename: str, content: str) -> str:
                import black
                return black.format_str(content, mode=black.FileMode())
    """

    def post_generate(self, filename: str, content: str) -> str:
        ...


class AddHeaderHook:
    """Built-in hook to add a header to generated files."""

    def __init__(self, header: str):
        self.header = header

    def post_generate(self, _filename: str, content: str) -> str:
        """Add a header to the beginning of the file."""
        if not self.header.endswith("\n"):
            header = self.header + "\n\n"
        else:
            header = self.header + "\n"
        return header + content


class HookRunner:
    """Runs post-generation hooks in the order they were added."""

    def __init__(self, hooks: list[PostGenerateHook] | None = None):
        self.post_hooks: list[PostGenerateHook] = list(hooks or [])

    def add_post_hook(self, hook: PostGenerateHook):
        self.post_hooks.append(hook)

    def run_post_hooks(self, filename: str, content: str) -> str:
        for hook in self.post_hooks:
            content = hook.post_generate(filename, content)
        return content
