import logging
from pathlib import Path
from typing import List, Dict, Any, Optional

from portal.core.errors import DegradedRead, NotFound
from portal.core.models import (
    InspectorExample,
    InstallStep,
    ServerCard,
    ServerDetails,
    ServerInspector,
    ServerInstallation,
    ServerRecord,
)
from portal.discovery.base import IServerDiscoverer
from portal.discovery.filesystem import (
    CONFIG_FILE,
    MANIFEST_FILE,
    README_FILE,
    list_entries,
    read_json_object,
    read_preview,
    read_text,
)
from portal.discovery.manifest import (
    default_icon,
    extract_features,
    list_value,
    person_name,
    resolve,
    section,
    string_list,
)

logger = logging.getLogger(__name__)

DEFAULT_COLOR = "#3b82f6"
DEFAULT_DESCRIPTION = "No description available"
DEFAULT_INSPECTOR_COMMAND = "npm run inspector"
DEFAULT_STEPS = [
    InstallStep(
        title="Install dependencies",
        command="npm install",
        description="Install all required dependencies",
    ),
    InstallStep(
        title="Build the server",
        command="npm run build",
        description="Compile TypeScript to JavaScript",
    ),
]
DEFAULT_CONFIGURATION = {
    "claude_desktop": {
        "command": "node",
        "args": ["build/index.js"],
        "env": {},
    }
}


class FolderDiscoverer(IServerDiscoverer):
    """Discovers MCP servers from the subfolders of a servers directory."""

    def __init__(self, servers_dir: Path, readme_preview_bytes: int = 300):
        self.servers_dir = Path(servers_dir)
        self.readme_preview_bytes = readme_preview_bytes

    def list_all(self) -> List[ServerRecord]:
        """Scan the servers directory. Never raises; problems are logged and skipped."""
        if not self.servers_dir.is_dir():
            logger.warning(f"Servers directory not found: {self.servers_dir}")
            return []

        try:
            entries = list_entries(self.servers_dir)
        except DegradedRead as e:
            logger.error(f"Error scanning servers directory: {e}")
            return []

        servers = []
        seen_ids = set()
        for entry in entries:
            record = self._load_entry(entry)
            if record is None:
                continue
            if record.id in seen_ids:
                logger.warning(f"Duplicate server id '{record.id}' in {entry.name}; keeping the first one")
                continue
            seen_ids.add(record.id)
            servers.append(record)

        logger.info(f"Discovered {len(servers)} server(s) in {self.servers_dir}")
        return servers

    def get_by_id(self, server_id: str) -> ServerRecord:
        server = next((s for s in self.list_all() if s.id == server_id), None)
        if server is None:
            raise NotFound("Server not found")
        return server

    def get_readme(self, server_id: str) -> str:
        server = self.get_by_id(server_id)
        readme_path = Path(server.path) / README_FILE
        if not readme_path.is_file():
            raise NotFound("README not found")
        try:
            return read_text(readme_path)
        except DegradedRead as e:
            logger.warning(f"Could not read README for '{server_id}': {e}")
            raise NotFound("README not found") from e

    def _load_entry(self, server_dir: Path) -> Optional[ServerRecord]:
        """Build a record for one folder, or None when it cannot be listed."""
        manifest_path = server_dir / MANIFEST_FILE
        if not manifest_path.is_file():
            logger.warning(f"Skipping {server_dir.name}: no {MANIFEST_FILE}")
            return None

        try:
            manifest = read_json_object(manifest_path)
        except DegradedRead as e:
            logger.warning(f"Skipping {server_dir.name}: {e}")
            return None

        config = {}
        config_path = server_dir / CONFIG_FILE
        if config_path.is_file():
            try:
                config = read_json_object(config_path)
            except DegradedRead as e:
                logger.error(f"Error reading {CONFIG_FILE} for {server_dir.name}, using {MANIFEST_FILE} only: {e}")

        readme_path = server_dir / README_FILE
        has_readme = readme_path.is_file()
        readme_preview = ""
        if has_readme:
            try:
                readme_preview = read_preview(readme_path, self.readme_preview_bytes)
            except DegradedRead as e:
                logger.warning(f"Could not read README preview for {server_dir.name}: {e}")

        try:
            return self._build_record(server_dir, manifest, config, readme_preview, has_readme)
        except Exception as e:
            logger.error(f"Error reading configuration for {server_dir.name}: {e}")
            return None

    def _build_record(self, server_dir: Path, manifest: Dict[str, Any], config: Dict[str, Any],
                      readme_preview: str, has_readme: bool) -> ServerRecord:
        folder = server_dir.name
        name = resolve(config.get("name"), manifest.get("name"), default=folder)
        description = resolve(config.get("description"), manifest.get("description"), default=DEFAULT_DESCRIPTION)
        keywords = resolve(string_list(config.get("keywords")), string_list(manifest.get("keywords")), default=[])
        dependencies = resolve(manifest.get("dependencies"), default={})
        dev_dependencies = resolve(manifest.get("devDependencies"), default={})

        card = section(config, "card")
        details = section(config, "details")
        installation = section(config, "installation")
        inspector = section(config, "inspector")

        return ServerRecord(
            id=str(resolve(config.get("id"), default=folder)),
            name=name,
            version=resolve(config.get("version"), manifest.get("version"), default="1.0.0"),
            description=description,
            keywords=keywords,
            author=resolve(person_name(config.get("author")), person_name(manifest.get("author")), default="Unknown"),
            license=resolve(config.get("license"), manifest.get("license"), default="MIT"),
            category=resolve(config.get("category"), default="utility"),
            path=str(server_dir.resolve()),
            card=ServerCard(
                icon=resolve(card.get("icon"), default=default_icon(folder)),
                color=resolve(card.get("color"), default=DEFAULT_COLOR),
                shortDescription=resolve(card.get("shortDescription"), default=description),
                features=resolve(string_list(card.get("features")),
                                 default=extract_features(readme_preview, manifest)),
                tags=resolve(string_list(card.get("tags")), default=keywords),
            ),
            details=ServerDetails(
                overview=resolve(details.get("overview"), default=description),
                capabilities=resolve(list_value(details.get("capabilities")), default=[]),
                tools=resolve(list_value(details.get("tools")), default=[]),
                prompts=resolve(list_value(details.get("prompts")), default=[]),
                resources=resolve(list_value(details.get("resources")), default=[]),
            ),
            installation=ServerInstallation(
                dependencies=resolve(installation.get("dependencies"), default=dependencies),
                devDependencies=resolve(installation.get("devDependencies"), default=dev_dependencies),
                steps=self._parse_steps(installation.get("steps")) or list(DEFAULT_STEPS),
            ),
            inspector=ServerInspector(
                enabled=bool(resolve(inspector.get("enabled"), default=True)),
                command=resolve(inspector.get("command"), default=DEFAULT_INSPECTOR_COMMAND),
                description=resolve(inspector.get("description"),
                                    default=f"Test the {name} with the MCP Inspector"),
                examples=self._parse_examples(inspector.get("examples")),
            ),
            configuration=resolve(section(config, "configuration"), default=DEFAULT_CONFIGURATION),
            readme=readme_preview,
            hasReadme=has_readme,
            scripts=resolve(manifest.get("scripts"), default={}),
        )

    def _parse_steps(self, raw_steps: Any) -> List[InstallStep]:
        if not isinstance(raw_steps, list):
            return []
        steps = []
        for raw in raw_steps:
            if isinstance(raw, dict) and raw.get("title"):
                steps.append(InstallStep(
                    title=raw["title"],
                    command=raw.get("command"),
                    description=raw.get("description", ""),
                ))
        return steps

    def _parse_examples(self, raw_examples: Any) -> List[InspectorExample]:
        if not isinstance(raw_examples, list):
            return []
        return [
            InspectorExample(
                tool=raw.get("tool", ""),
                description=raw.get("description", ""),
                params=raw.get("params") if isinstance(raw.get("params"), dict) else {},
            )
            for raw in raw_examples if isinstance(raw, dict)
        ]
