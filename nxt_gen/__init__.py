"""nxt-gen -- scaffold Next.js applications with optional features.

The package is split into three layers:

- ``nxt_gen.installer`` collects package requirements from every selected
  feature and installs them in at most two batched invocations.
- ``nxt_gen.mutator`` performs idempotent, structure-aware edits of the files
  produced by ``create-next-app`` (root layout, Tailwind config, ...).
- ``nxt_gen.scaffolder`` sequences the feature modules and renders their
  Jinja2 templates.

Quick usage::

    from nxt_gen.config import Config, ProjectConfig
    from nxt_gen.scaffolder import ProjectGenerator

    config = Config(project_name="my-app", features=ProjectConfig(orm="prisma"))
    result = await ProjectGenerator(config).generate()
"""

__version__ = "0.4.0"
