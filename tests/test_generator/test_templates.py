"""Tests for discogen.generator.templates and the bundled templates.

Covers:
- environment configuration and registered filters
- RenderError on missing templates, syntax errors and missing context fields
- binding output for a realistic document (namespaces, resource classes,
  params interfaces, schema interfaces, request URLs)
- sample output with and without request/response examples
- per-API packaging files and the aggregate indexes
"""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from jinja2 import StrictUndefined

from discogen.exceptions import RenderError
from discogen.generator.examples import resolve_example
from discogen.generator.methods import collect_methods
from discogen.generator.template_contexts import (
    AggregateIndexContext,
    ApiIndexContext,
    BindingContext,
    PackageContext,
    SampleContext,
    template_vars,
)
from discogen.generator.templates import (
    API_INDEX_TEMPLATE,
    BINDING_TEMPLATE,
    INDEX_TEMPLATE,
    PACKAGE_TEMPLATE,
    README_TEMPLATE,
    ROOT_INDEX_TEMPLATE,
    SAMPLE_TEMPLATE,
    TEMPLATE_DIR,
    TSCONFIG_TEMPLATE,
    WEBPACK_TEMPLATE,
    TemplateRenderer,
    create_environment,
    to_json,
)
from discogen.models import DiscoveryDocument


VISION_VERSIONS = {"v1.ts": "v1", "v1p2beta1.ts": "v1p2beta1"}


@pytest.fixture
def renderer() -> TemplateRenderer:
    return TemplateRenderer()


@pytest.fixture
def vision_binding(renderer: TemplateRenderer, vision_doc: DiscoveryDocument) -> str:
    return renderer.render(BINDING_TEMPLATE, BindingContext(api=vision_doc))


def _sample(renderer: TemplateRenderer, doc: DiscoveryDocument, method_id: str) -> str:
    method = next(m for m in collect_methods(doc) if m.id == method_id)
    return renderer.render(
        SAMPLE_TEMPLATE,
        SampleContext(
            api=doc,
            method=method,
            response_example=resolve_example(method.response, doc.schemas),
            request_example=resolve_example(method.request, doc.schemas),
        ),
    )


# ------------------------------------------------------------------ #
# Environment
# ------------------------------------------------------------------ #


class TestEnvironment:
    def test_bundled_templates_exist(self) -> None:
        for name in (
            BINDING_TEMPLATE,
            SAMPLE_TEMPLATE,
            API_INDEX_TEMPLATE,
            PACKAGE_TEMPLATE,
            README_TEMPLATE,
            TSCONFIG_TEMPLATE,
            WEBPACK_TEMPLATE,
            INDEX_TEMPLATE,
            ROOT_INDEX_TEMPLATE,
        ):
            assert (TEMPLATE_DIR / name).is_file(), name

    def test_filters_registered(self) -> None:
        env = create_environment()
        for name in (
            "build_url",
            "one_line",
            "get_type",
            "get_param_type",
            "clean_property_name",
            "un_regex",
            "clean_comments",
            "camelify",
            "upper_first",
            "namespace_name",
            "get_path_params",
            "get_safe_param_name",
            "has_resource_param",
            "clean_paths",
            "to_json",
        ):
            assert name in env.filters, name

    def test_strict_and_unescaped(self) -> None:
        env = create_environment()
        assert env.undefined is StrictUndefined
        assert env.autoescape is False

    def test_each_renderer_owns_its_environment(self) -> None:
        assert TemplateRenderer().environment is not TemplateRenderer().environment

    def test_to_json(self) -> None:
        assert to_json({"a": []}) == '{\n  "a": []\n}'


class TestRenderErrors:
    def test_missing_template(self, renderer: TemplateRenderer) -> None:
        with pytest.raises(RenderError, match="nope.j2"):
            renderer.render("nope.j2")

    def test_missing_context_field(self, renderer: TemplateRenderer) -> None:
        with pytest.raises(RenderError):
            renderer.render(BINDING_TEMPLATE)

    def test_syntax_error(self, tmp_path: Path) -> None:
        (tmp_path / "broken.j2").write_text("{% if %}", encoding="utf-8")
        with pytest.raises(RenderError, match="broken.j2"):
            TemplateRenderer(tmp_path).render("broken.j2")

    def test_custom_templates_dir(self, tmp_path: Path, minimal_doc: DiscoveryDocument) -> None:
        (tmp_path / BINDING_TEMPLATE).write_text("// {{ api.name }} {{ api.version }}\n", encoding="utf-8")
        rendered = TemplateRenderer(tmp_path).render(BINDING_TEMPLATE, BindingContext(api=minimal_doc))
        assert rendered == "// pets v1\n"


class TestTemplateVars:
    def test_fields_become_variables(self, minimal_doc: DiscoveryDocument) -> None:
        ctx = SampleContext(api=minimal_doc, method=collect_methods(minimal_doc)[0])
        assert set(template_vars(ctx)) == {"api", "method", "response_example", "request_example"}
        assert template_vars(ctx)["api"] is minimal_doc


# ------------------------------------------------------------------ #
# Binding
# ------------------------------------------------------------------ #


class TestBindingTemplate:
    def test_namespace_and_class(self, vision_binding: str) -> None:
        assert "export namespace vision_v1 {" in vision_binding
        assert "version: 'v1';" in vision_binding
        assert "export class Vision {" in vision_binding

    def test_standard_parameters(self, vision_binding: str) -> None:
        assert "'$.xgafv'?: string;" in vision_binding
        assert "key?: string;" in vision_binding

    def test_resource_classes(self, vision_binding: str) -> None:
        assert "operations: Resource$Operations;" in vision_binding
        assert "export class Resource$Operations {" in vision_binding
        assert "export class Resource$Projects$Locations$Products {" in vision_binding
        assert "locations: Resource$Projects$Locations;" in vision_binding

    def test_params_interfaces(self, vision_binding: str) -> None:
        assert "export interface Params$Resource$Operations$Get" in vision_binding
        assert "export interface Params$Resource$Projects$Locations$Products$Patch" in vision_binding
        assert "requestBody?: Schema$Product;" in vision_binding
        assert "pageSize?: number;" in vision_binding

    def test_schema_interfaces(self, vision_binding: str) -> None:
        assert "export interface Schema$Operation {" in vision_binding
        assert "metadata?: { [key: string]: any; } | null;" in vision_binding
        assert "operations?: Schema$Operation[] | null;" in vision_binding
        assert "details?: Array<{ [key: string]: any; }> | null;" in vision_binding

    def test_request_urls(self, vision_binding: str) -> None:
        assert "options.rootUrl || 'https://vision.googleapis.com/'" in vision_binding
        assert "url: (rootUrl + '/v1/{+name}')" in vision_binding
        assert "method: 'PATCH'," in vision_binding
        assert "requiredParams: ['name']," in vision_binding
        assert "pathParams: ['name']," in vision_binding

    def test_response_types(self, vision_binding: str) -> None:
        assert "GaxiosPromise<Schema$ListOperationsResponse>" in vision_binding

    def test_comment_terminators_are_neutralised(
        self, renderer: TemplateRenderer, minimal_raw: dict
    ) -> None:
        minimal_raw["description"] = "Matches a/*/b paths */ exactly."
        doc = DiscoveryDocument.model_validate(minimal_raw)
        rendered = renderer.render(BINDING_TEMPLATE, BindingContext(api=doc))
        assert "a/x/b paths x/ exactly." in rendered

    def test_reserved_parameter_names(self, renderer: TemplateRenderer, minimal_raw: dict) -> None:
        minimal_raw["resources"]["pets"]["methods"]["create"]["parameters"] = {
            "resource": {"type": "string", "location": "path", "required": True}
        }
        doc = DiscoveryDocument.model_validate(minimal_raw)
        rendered = renderer.render(BINDING_TEMPLATE, BindingContext(api=doc))
        assert "resource_?: string;" in rendered
        assert "(params as any).resource = params.resource_;" in rendered
        assert "delete params.resource_;" in rendered

    def test_resource_remap_only_when_declared(self, vision_binding: str) -> None:
        assert "params.resource_" not in vision_binding

    def test_media_upload(self, renderer: TemplateRenderer, minimal_raw: dict) -> None:
        minimal_raw["resources"]["pets"]["methods"]["create"]["supportsMediaUpload"] = True
        doc = DiscoveryDocument.model_validate(minimal_raw)
        rendered = renderer.render(BINDING_TEMPLATE, BindingContext(api=doc))
        assert "mediaUrl: (rootUrl + '/upload/v1/pets')" in rendered
        assert "media?: {" in rendered


# ------------------------------------------------------------------ #
# Samples
# ------------------------------------------------------------------ #


class TestSampleTemplate:
    def test_call_and_path_parameters(
        self, renderer: TemplateRenderer, vision_doc: DiscoveryDocument
    ) -> None:
        sample = _sample(renderer, vision_doc, "vision.projects.locations.products.patch")
        assert "const vision = google.vision('v1');" in sample
        assert "const res = await vision.projects.locations.products.patch({" in sample
        assert "name: 'projects/my-project/locations/my-location/products/my-product'," in sample
        assert "updateMask: 'placeholder-value'," in sample

    def test_request_and_response_examples(
        self, renderer: TemplateRenderer, vision_doc: DiscoveryDocument
    ) -> None:
        sample = _sample(renderer, vision_doc, "vision.projects.locations.products.patch")
        assert "requestBody: {" in sample
        assert '//   "displayName": "my_displayName",' in sample
        assert "// Example response" in sample
        assert '//   "productLabels": []' in sample

    def test_without_request_body(
        self, renderer: TemplateRenderer, vision_doc: DiscoveryDocument
    ) -> None:
        sample = _sample(renderer, vision_doc, "vision.operations.get")
        assert "requestBody" not in sample
        assert "name: 'operations/my-operation'," in sample

    def test_scopes(self, renderer: TemplateRenderer, vision_doc: DiscoveryDocument) -> None:
        sample = _sample(renderer, vision_doc, "vision.operations.get")
        assert "'https://www.googleapis.com/auth/cloud-vision'," in sample

    def test_description_header(
        self, renderer: TemplateRenderer, vision_doc: DiscoveryDocument
    ) -> None:
        sample = _sample(renderer, vision_doc, "vision.operations.list")
        assert " * vision.operations.list\n * Lists operations" in sample


# ------------------------------------------------------------------ #
# Packaging and indexes
# ------------------------------------------------------------------ #


class TestPackagingTemplates:
    def test_api_index(self, renderer: TemplateRenderer) -> None:
        rendered = renderer.render(
            API_INDEX_TEMPLATE, ApiIndexContext(name="vision", versions=VISION_VERSIONS)
        )
        assert "import { vision_v1 } from './v1';" in rendered
        assert "import { vision_v1p2beta1 } from './v1p2beta1';" in rendered
        assert "'v1': vision_v1.Vision," in rendered
        assert "return getAPI<T>('vision', versionOrOptions, VERSIONS, this);" in rendered

    def test_package_json(self, renderer: TemplateRenderer) -> None:
        ctx = PackageContext(name="vision", desc='Says "hi"', versions=VISION_VERSIONS)
        manifest = json.loads(renderer.render(PACKAGE_TEMPLATE, ctx))
        assert manifest["name"] == "@googleapis/vision"
        assert manifest["description"] == 'Says "hi"'

    def test_package_json_without_description(self, renderer: TemplateRenderer) -> None:
        manifest = json.loads(renderer.render(PACKAGE_TEMPLATE, PackageContext(name="vision")))
        assert manifest["description"] == ""

    def test_readme(self, renderer: TemplateRenderer) -> None:
        ctx = PackageContext(name="vision", desc="Image labeling.", versions=VISION_VERSIONS)
        readme = renderer.render(README_TEMPLATE, ctx)
        assert "# vision" in readme
        assert "> Image labeling." in readme
        assert "`v1`, `v1p2beta1`" in readme

    def test_tsconfig(self, renderer: TemplateRenderer) -> None:
        config = json.loads(renderer.render(TSCONFIG_TEMPLATE, PackageContext(name="vision")))
        assert config["compilerOptions"]["outDir"] == "build"

    def test_webpack(self, renderer: TemplateRenderer) -> None:
        rendered = renderer.render(WEBPACK_TEMPLATE, PackageContext(name="vision"))
        assert "filename: 'vision.min.js'," in rendered
        assert "library: 'Vision'," in rendered

    def test_apis_index(self, renderer: TemplateRenderer) -> None:
        ctx = AggregateIndexContext(apis={"drive": {"v3.ts": "v3"}, "vision": VISION_VERSIONS})
        rendered = renderer.render(INDEX_TEMPLATE, ctx)
        assert "import {VERSIONS as drive_VERSIONS, drive } from './drive';" in rendered
        assert "  vision: vision_VERSIONS," in rendered

    def test_root_index(self, renderer: TemplateRenderer) -> None:
        ctx = AggregateIndexContext(apis={"vision": VISION_VERSIONS}, apis_dir="apis")
        rendered = renderer.render(ROOT_INDEX_TEMPLATE, ctx)
        assert "export { vision_v1 } from './apis/vision/v1';" in rendered
        assert "export { vision_v1p2beta1 } from './apis/vision/v1p2beta1';" in rendered
