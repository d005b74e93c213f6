"""Data models for WESL bundles."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple


@dataclass
class WeslBundle:
    """Shader sources published by one npm package export."""
    name: str
    edition: str
    modules: List[Tuple[str, str]] = field(default_factory=list)  # (module path, source)
    # Transitive bundles; not populated yet, kept so the shape matches weslBundle.js
    dependencies: List["WeslBundle"] = field(default_factory=list)

    def module(self, module_path: str) -> Optional[str]:
        """Source of the first module registered under module_path."""
        for path, source in self.modules:
            if path == module_path:
                return source
        return None

    def to_dict(self) -> Dict[str, Any]:
        """JSON-ready representation."""
        return {
            "name": self.name,
            "edition": self.edition,
            "modules": [[path, source] for path, source in self.modules],
            "dependencies": [dep.to_dict() for dep in self.dependencies],
        }
