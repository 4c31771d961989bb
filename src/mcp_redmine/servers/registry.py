"""Tool descriptors and the tool registry."""

from collections.abc import Awaitable, Callable, Iterator
from dataclasses import dataclass, field
from typing import Any

from mcp import types

from ..validators import ToolInput

ToolHandler = Callable[[Any, Any], Awaitable[Any]]


@dataclass
class ToolResult:
    """Uniform result of one tool call."""

    content: list[types.TextContent] = field(default_factory=list)
    is_error: bool = False

    @classmethod
    def text(cls, text: str) -> "ToolResult":
        return cls(content=[types.TextContent(type="text", text=text)])

    @classmethod
    def error(cls, message: str) -> "ToolResult":
        return cls(content=[types.TextContent(type="text", text=message)], is_error=True)

    def to_call_tool_result(self) -> types.CallToolResult:
        return types.CallToolResult(content=list(self.content), isError=self.is_error)


@dataclass(frozen=True)
class ToolDescriptor:
    """A registered tool: its metadata, input model and handler."""

    name: str
    title: str
    description: str
    input_model: type[ToolInput]
    handler: ToolHandler
    tags: frozenset[str] = frozenset()

    @property
    def input_schema(self) -> dict[str, Any]:
        return self.input_model.model_json_schema()

    @property
    def is_write(self) -> bool:
        return "write" in self.tags

    def to_tool(self) -> types.Tool:
        return types.Tool(
            name=self.name,
            description=self.description,
            inputSchema=self.input_schema,
            annotations=types.ToolAnnotations(
                title=self.title,
                readOnlyHint=not self.is_write,
                destructiveHint="destructive" in self.tags,
            ),
        )


class ToolGroup:
    """Collects the tools of one resource group.

    Example:
        issues = ToolGroup("issues")

        @issues.tool(name="redmine_get_issue", ...)
        async def get_issue(fetcher, params): ...
    """

    def __init__(self, name: str) -> None:
        self.name = name
        self.tools: list[ToolDescriptor] = []

    def tool(
        self,
        *,
        name: str,
        title: str,
        description: str,
        input_model: type[ToolInput],
        write: bool = False,
        destructive: bool = False,
    ) -> Callable[[ToolHandler], ToolHandler]:
        tags = {self.name, "write" if write else "read"}
        if destructive:
            tags.add("destructive")

        def decorator(handler: ToolHandler) -> ToolHandler:
            self.tools.append(
                ToolDescriptor(
                    name=name,
                    title=title,
                    description=description,
                    input_model=input_model,
                    handler=handler,
                    tags=frozenset(tags),
                )
            )
            return handler

        return decorator


class ToolRegistry:
    """Name to descriptor mapping, iterated in registration order."""

    def __init__(self) -> None:
        self._tools: dict[str, ToolDescriptor] = {}

    def register(self, descriptor: ToolDescriptor) -> None:
        if descriptor.name in self._tools:
            raise ValueError(f"Tool '{descriptor.name}' is already registered")
        self._tools[descriptor.name] = descriptor

    def register_group(self, group: ToolGroup) -> None:
        for descriptor in group.tools:
            self.register(descriptor)

    def get(self, name: str) -> ToolDescriptor | None:
        return self._tools.get(name)

    def names(self) -> list[str]:
        return list(self._tools)

    def __contains__(self, name: object) -> bool:
        return name in self._tools

    def __iter__(self) -> Iterator[ToolDescriptor]:
        return iter(self._tools.values())

    def __len__(self) -> int:
        return len(self._tools)


def build_registry() -> ToolRegistry:
    """Create a registry holding the full Redmine tool catalog."""
    from .tools import TOOL_GROUPS

    registry = ToolRegistry()
    for group in TOOL_GROUPS:
        registry.register_group(group)
    return registry
