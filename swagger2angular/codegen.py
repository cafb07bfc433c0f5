"""Drive the model and resource pipelines and write generated output.

The :class:`Generator` resolves descriptors, renders each one through its
compiled template and renders one barrel per pipeline. Rendering runs as
concurrent tasks, but results are always collected by descriptor
position, so barrels list files in the order descriptors were produced.
"""

from __future__ import annotations

import asyncio
import json
import logging
from pathlib import Path
from typing import Any

from .config import GeneratorConfig
from .loader import get_base_path, get_definitions, get_parameters, get_paths
from .models import GenerationResult, ModelDescriptor, RenderedFile, ResourceDescriptor
from .naming import deduplicate, file_stem, to_pascal
from .path_grouper import group_paths
from .schema_resolver import resolve_definitions
from .templating import (
    BARREL_TEMPLATE,
    MODEL_TEMPLATE,
    RESOURCE_TEMPLATE,
    builtin_template_path,
    compile_template,
    load_template_source,
)

logger = logging.getLogger(__name__)

MODELS_DIR = "models"
RESOURCES_DIR = "resources"
BARREL_STEM = "index"
EXTENSION = ".ts"


def _file_stems(names: list[str]) -> dict[str, str]:
    """Map each name to a unique file stem, never clashing with the barrel."""
    stems = deduplicate([BARREL_STEM] + [file_stem(n) for n in names])[1:]
    return dict(zip(names, stems))


class Generator:
    """Generate an Angular client from a parsed Swagger document.

    Templates are compiled on construction, so a broken template fails
    before any descriptor is resolved.

    Args:
        spec: The parsed Swagger document. Never modified.
        config: Run configuration; defaults to built-in templates.
    """

    def __init__(self, spec: dict[str, Any], config: GeneratorConfig | None = None):
        self.spec = spec
        self.config = config or GeneratorConfig()
        template_files = {
            MODEL_TEMPLATE: self.config.model_template_file,
            RESOURCE_TEMPLATE: self.config.resource_template_file,
            BARREL_TEMPLATE: builtin_template_path(BARREL_TEMPLATE),
        }
        self.template_sources = {
            name: load_template_source(path) for name, path in template_files.items()
        }
        self._render_model, self._render_resource, self._render_barrel = (
            compile_template(self.template_sources[name], str(template_files[name]))
            for name in (MODEL_TEMPLATE, RESOURCE_TEMPLATE, BARREL_TEMPLATE)
        )
        self._model_stems: dict[str, str] = _file_stems(list(get_definitions(spec)))

    @staticmethod
    def template_compiler(source: str):
        """Compile an arbitrary template with the generator's engine."""
        return compile_template(source)

    def get_output_path(self) -> str:
        return self.config.output

    # -- descriptors --------------------------------------------------------

    def get_models(self) -> list[ModelDescriptor]:
        """Resolve every definition into a model descriptor, in order."""
        return resolve_definitions(get_definitions(self.spec), self.config.fallback_type)

    def get_resources(self) -> list[ResourceDescriptor]:
        """Group every operation into resource descriptors, in order."""
        return group_paths(
            get_paths(self.spec),
            get_definitions(self.spec),
            verb_order=self.config.verb_order,
            tag_policy=self.config.tag_policy,
            default_tag=self.config.default_tag,
            fallback_type=self.config.fallback_type,
            shared_parameters=get_parameters(self.spec),
        )

    # -- rendering ----------------------------------------------------------

    def model_context(self, model: ModelDescriptor) -> dict[str, Any]:
        imports = [{"name": name, "path": self._model_stems[name]} for name in model.references]
        return {"model": model.model_dump(), "imports": imports}

    def resource_context(self, resource: ResourceDescriptor) -> dict[str, Any]:
        return {
            "resource": resource.model_dump(),
            "class_name": f"{to_pascal(resource.name) or 'Default'}Resource",
            "base_path": get_base_path(self.spec),
        }

    def process_model(self, model: ModelDescriptor, stem: str | None = None) -> RenderedFile:
        """Render one model descriptor to a file record."""
        stem = stem or self._model_stems.get(model.name) or file_stem(model.name)
        return RenderedFile(
            relative_path=f"{MODELS_DIR}/{stem}{EXTENSION}",
            content=self._render_model(self.model_context(model)),
        )

    def process_resource(self, resource: ResourceDescriptor, stem: str | None = None) -> RenderedFile:
        """Render one resource descriptor to a file record."""
        stem = stem or file_stem(resource.name)
        return RenderedFile(
            relative_path=f"{RESOURCES_DIR}/{stem}{EXTENSION}",
            content=self._render_resource(self.resource_context(resource)),
        )

    def render_barrel(self, directory: str, records: list[RenderedFile]) -> RenderedFile:
        """Render the index file exporting ``records`` in the given order."""
        paths = [Path(r.relative_path).stem for r in records]
        return RenderedFile(
            relative_path=f"{directory}/{BARREL_STEM}{EXTENSION}",
            content=self._render_barrel({"paths": paths}),
        )

    # -- pipelines ----------------------------------------------------------

    async def _render_all(self, render, descriptors, stems: list[str]) -> list[RenderedFile]:
        # gather returns results by argument position, not completion order
        tasks = [
            asyncio.to_thread(render, descriptor, stem)
            for descriptor, stem in zip(descriptors, stems)
        ]
        return list(await asyncio.gather(*tasks))

    async def _model_pipeline(self, models: list[ModelDescriptor]) -> list[RenderedFile]:
        stems = [self._model_stems[m.name] for m in models]
        records = await self._render_all(self.process_model, models, stems)
        logger.info("Rendered %d models", len(records))
        return records + [self.render_barrel(MODELS_DIR, records)]

    async def _resource_pipeline(self, resources: list[ResourceDescriptor]) -> list[RenderedFile]:
        stems = list(_file_stems([r.name for r in resources]).values())
        records = await self._render_all(self.process_resource, resources, stems)
        logger.info("Rendered %d resources", len(records))
        return records + [self.render_barrel(RESOURCES_DIR, records)]

    async def generate(self) -> GenerationResult:
        """Run both pipelines.

        Both descriptor lists are resolved before any rendering starts, so
        a resolution error aborts the run with nothing rendered.
        """
        models = self.get_models()
        resources = self.get_resources()
        model_records, resource_records = await asyncio.gather(
            self._model_pipeline(models),
            self._resource_pipeline(resources),
        )
        return GenerationResult(models=model_records, resources=resource_records)

    def run(self) -> GenerationResult:
        return asyncio.run(self.generate())


def write_output(result: GenerationResult, output_dir: str | Path) -> list[Path]:
    """Write every rendered record under ``output_dir``.

    Each pipeline's barrel is the last record of its list, so it is
    written after all the files it exports.
    """
    output_dir = Path(output_dir)
    written: list[Path] = []
    for records in (result.models, result.resources):
        for record in records:
            path = output_dir / record.relative_path
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(record.content, encoding="utf-8")
            written.append(path)
    logger.debug("Wrote %d files to %s", len(written), output_dir)
    return written


def export_templates(generator: Generator, output_dir: str | Path) -> list[Path]:
    """Write the active templates and the contexts they are rendered with.

    Gives template authors a starting point: one file per template plus
    ``model-contexts.json`` and ``resource-contexts.json``. Contexts are
    built before anything is written, so a resolution error leaves
    ``output_dir`` untouched.
    """
    contexts = {
        "model-contexts.json": [generator.model_context(m) for m in generator.get_models()],
        "resource-contexts.json": [generator.resource_context(r) for r in generator.get_resources()],
    }

    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)
    written: list[Path] = []

    for name, source in generator.template_sources.items():
        path = output_dir / name
        path.write_text(source, encoding="utf-8")
        written.append(path)

    for name, data in contexts.items():
        path = output_dir / name
        path.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
        written.append(path)

    return written
