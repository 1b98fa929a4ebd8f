#!/usr/bin/env python3
"""
Data models for the MCP server portal.
"""
from dataclasses import dataclass, field, asdict
from typing import Dict, List, Any, Optional


@dataclass
class InstallStep:
    """One installation instruction shown for a server."""
    title: str
    description: str = ""
    command: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data = {'title': self.title, 'description': self.description}
        if self.command:
            data['command'] = self.command
        return data


@dataclass
class InspectorExample:
    """An example tool call to try in the MCP Inspector."""
    tool: str
    description: str = ""
    params: Dict[str, Any] = field(default_factory=dict)


@dataclass
class ServerCard:
    """Display projection of a server for the listing grid."""
    icon: str
    color: str
    shortDescription: str
    features: List[str]
    tags: List[str]


@dataclass
class ServerDetails:
    """Deep structural information about a server."""
    overview: str
    capabilities: List[Any] = field(default_factory=list)
    tools: List[Any] = field(default_factory=list)
    prompts: List[Any] = field(default_factory=list)
    resources: List[Any] = field(default_factory=list)


@dataclass
class ServerInstallation:
    """Dependencies and ordered setup steps."""
    dependencies: Dict[str, Any]
    devDependencies: Dict[str, Any]
    steps: List[InstallStep]

    def to_dict(self) -> Dict[str, Any]:
        return {
            'dependencies': self.dependencies,
            'devDependencies': self.devDependencies,
            'steps': [step.to_dict() for step in self.steps],
        }


@dataclass
class ServerInspector:
    """How to launch the MCP Inspector against a server."""
    enabled: bool
    command: str
    description: str
    examples: List[InspectorExample] = field(default_factory=list)


@dataclass
class ServerRecord:
    """
    Snapshot of one discovered server folder.

    Records are rebuilt on every scan. The legacy fields at the bottom mirror
    data held elsewhere in the record and are kept for older clients.
    """
    id: str
    name: str
    version: str
    description: str
    keywords: List[str]
    author: str
    license: str
    category: str
    path: str
    card: ServerCard
    details: ServerDetails
    installation: ServerInstallation
    inspector: ServerInspector
    configuration: Dict[str, Any]
    readme: str = ""
    hasReadme: bool = False
    scripts: Dict[str, Any] = field(default_factory=dict)

    @property
    def features(self) -> List[str]:
        return self.card.features

    @property
    def dependencies(self) -> Dict[str, Any]:
        return self.installation.dependencies

    def to_dict(self) -> Dict[str, Any]:
        """Serializes the record using the field names the frontend expects."""
        return {
            'id': self.id,
            'name': self.name,
            'version': self.version,
            'description': self.description,
            'keywords': list(self.keywords),
            'author': self.author,
            'license': self.license,
            'category': self.category,
            'path': self.path,
            'card': asdict(self.card),
            'details': asdict(self.details),
            'installation': self.installation.to_dict(),
            'inspector': asdict(self.inspector),
            'configuration': self.configuration,
            'features': list(self.features),
            'readme': self.readme,
            'hasReadme': self.hasReadme,
            'scripts': self.scripts,
            'dependencies': self.dependencies,
        }
