import json
from pathlib import Path
from typing import Any, Dict, List


class ResourceManager:
    """Manages access to packaged resources like ABIs"""

    def __init__(self):
        self._package_root = Path(__file__).resolve().parent.parent.parent
        self._resources_root = (self._package_root / "resources").resolve(
            strict=False
        )
        self._cache: Dict[str, Any] = {}

    def get_resource_path(self, resource_type: str, filename: str) -> Path:
        """Get full path to a resource file"""
        resource_dir = self._get_resource_dir(resource_type)
        resource_path = (resource_dir / filename).resolve(strict=False)

        try:
            resource_path.relative_to(resource_dir)
        except ValueError:
            raise ValueError(
                f"Invalid resource path outside {resource_dir}: {filename}"
            )

        return resource_path

    def load_abi(self, name: str) -> List[Dict[str, Any]]:
        """Load an ABI file from the resources"""
        cache_key = f"abi:{name}"
        if cache_key not in self._cache:
            abi_path = self.get_resource_path("abi", f"{name}.json")
            if not abi_path.exists():
                raise FileNotFoundError(f"ABI file not found: {abi_path}")
            with open(abi_path) as f:
                self._cache[cache_key] = json.load(f)
        return self._cache[cache_key]

    def _get_resource_dir(self, resource_type: str) -> Path:
        resource_dir = (self._resources_root / resource_type).resolve(
            strict=False
        )
        try:
            resource_dir.relative_to(self._resources_root)
        except ValueError:
            raise ValueError(f"Invalid resource type: {resource_type}")

        return resource_dir


# Global instance
resource_manager = ResourceManager()
