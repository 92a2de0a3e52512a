"""nxt-gen configuration.

Typed configuration for a scaffold run.  ``ProjectConfig`` captures the
feature selection (what the interactive questions or CLI flags decided);
``Config`` wraps it with run settings such as the target directory and the
package manager.  Both are Pydantic v2 models so they validate at
construction time and serialise to/from JSON without boiler-plate.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, Field, model_validator

from nxt_gen.installer.pm import PACKAGE_MANAGERS, PackageManager

OrmChoice = Literal["prisma", "drizzle", "none"]
UiChoice = Literal["shadcn", "heroui", "both", "none"]
ExamplesChoice = Literal["crud", "auth", "both", "none"]
AuthChoice = Literal["next-auth", "clerk", "none"]
LicenseChoice = Literal["MIT", "Apache", "none"]


class ProjectConfig(BaseModel):
    """Feature selection for the generated project.

    Every field has the default the interactive flow would propose, so
    ``ProjectConfig()`` is a valid "accept all defaults" selection.
    """

    orm: OrmChoice = Field(default="none", description="Data-access layer")
    react_query: bool = Field(default=False, description="TanStack Query client")
    axios: bool = Field(default=False, description="Axios HTTP client")
    ui: UiChoice = Field(default="none", description="UI component kit")
    framer_motion: bool = Field(default=False)
    lucide: bool = Field(default=True)
    examples: ExamplesChoice = Field(default="none", description="Example pages")
    docker: bool = Field(default=False)
    ci: bool = Field(default=False, description="GitHub Actions workflow")
    husky: bool = Field(default=False, description="Husky + lint-staged + Prettier")
    vitest: bool = Field(default=False)
    playwright: bool = Field(default=False)
    storybook: bool = Field(default=False)
    forms: bool = Field(default=False, description="React Hook Form + Zod")
    intl: bool = Field(default=False, description="next-intl")
    license: LicenseChoice = Field(default="none")
    auth: AuthChoice = Field(default="none", description="Authentication provider")

    @model_validator(mode="after")
    def _auth_examples_need_provider(self) -> "ProjectConfig":
        # The auth example only makes sense with a provider selected.
        if self.auth == "none":
            if self.examples == "auth":
                self.examples = "none"
            elif self.examples == "both":
                self.examples = "crud"
        return self

    # -- Derived flags -----------------------------------------------------

    @property
    def uses_heroui(self) -> bool:
        return self.ui in ("heroui", "both")

    @property
    def uses_shadcn(self) -> bool:
        return self.ui in ("shadcn", "both")

    @property
    def wants_crud_example(self) -> bool:
        return self.examples in ("crud", "both")

    @property
    def wants_auth_example(self) -> bool:
        return self.examples in ("auth", "both")

    # -- Serialisation -----------------------------------------------------

    def save(self, path: Path) -> Path:
        """Persist the selection to a JSON file and return its path."""
        target = Path(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(self.model_dump_json(indent=2) + "\n", encoding="utf-8")
        return target

    @classmethod
    def load(cls, path: Path) -> "ProjectConfig":
        """Load a previously-saved selection from JSON."""
        raw = Path(path).read_text(encoding="utf-8")
        return cls.model_validate_json(raw)


class Config(BaseModel):
    """Settings for a single scaffold run.

    Instances are created once by the CLI entry point and handed to
    ``ProjectGenerator``.
    """

    project_name: str = Field(default="my-app")
    output_dir: Path = Field(default_factory=Path.cwd)
    package_manager: PackageManager | None = Field(
        default=None, description="Detected from npm_config_user_agent when omitted"
    )
    install: bool = Field(default=True, description="Run the batched install step")
    next_version: str = Field(default="latest", description="create-next-app version tag")
    features: ProjectConfig = Field(default_factory=ProjectConfig)

    @property
    def project_path(self) -> Path:
        """Absolute path of the project directory to create."""
        return (self.output_dir / self.project_name).resolve()

    @classmethod
    def from_env(cls, **overrides: Any) -> "Config":
        """Build a ``Config`` from environment variables.

        Recognised variables (all optional):
            NXT_GEN_OUTPUT_DIR, NXT_GEN_PACKAGE_MANAGER,
            NXT_GEN_SKIP_INSTALL, NXT_GEN_NEXT_VERSION.

        Keyword *overrides* win over the environment.
        """
        kwargs: dict[str, Any] = {}
        if os.environ.get("NXT_GEN_OUTPUT_DIR"):
            kwargs["output_dir"] = Path(os.environ["NXT_GEN_OUTPUT_DIR"])
        pm = os.environ.get("NXT_GEN_PACKAGE_MANAGER", "").strip().lower()
        if pm in PACKAGE_MANAGERS:
            kwargs["package_manager"] = pm
        if os.environ.get("NXT_GEN_SKIP_INSTALL", "").lower() in ("1", "true", "yes"):
            kwargs["install"] = False
        if os.environ.get("NXT_GEN_NEXT_VERSION"):
            kwargs["next_version"] = os.environ["NXT_GEN_NEXT_VERSION"]

        kwargs.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**kwargs)
