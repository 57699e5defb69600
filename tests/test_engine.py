"""Tests for the provider generation engine."""

from unittest.mock import MagicMock, patch

import pytest

from textresource_engine.declarations.model import MarkedDeclaration, ResourceBinding
from textresource_engine.engine import generate, normalize_space, process_declaration
from textresource_engine.errors import TemplateError, WriteError
from textresource_engine.host import GenerationContext

from conftest import write_resource

GREETING = MarkedDeclaration(
    "com.acme.Greeting",
    visibility="public",
    binding=ResourceBinding(file_extension="txt", normalize_space=True),
)


def _generated(layout, qualified_name):
    package, _, simple = qualified_name.rpartition(".")
    return layout["out"].joinpath(*package.split(".")) / f"{simple}.java"


def _spy_resolver(context):
    spy = MagicMock(wraps=context.resolver)
    context.resolver = spy
    return spy


class TestEndToEnd:
    def test_greeting(self, layout, context):
        write_resource(layout["src"], "com.acme.Greeting", "txt", "Hello\n  World")

        report = generate([GREETING], context)

        assert report.ok
        assert report.written == ["com.acme.GreetingProvider", "com.acme.GreetingProviderJ2cl"]

        lazy = _generated(layout, "com.acme.GreetingProvider").read_text()
        assert lazy.startswith("package com.acme;\n")
        assert "public final class GreetingProvider implements TextResource" in lazy
        assert 'TextResources.classPath("Greeting.txt", GreetingProvider.class)' in lazy

        embedded = _generated(layout, "com.acme.GreetingProviderJ2cl").read_text()
        assert "public final class GreetingProviderJ2cl implements TextResource" in embedded
        assert 'return "Hello World";' in embedded

    def test_package_visible_provider(self, layout, context):
        write_resource(layout["src"], "com.acme.Greeting", "txt", "x")
        d = MarkedDeclaration("com.acme.Greeting", visibility="default")
        generate([d], context)
        lazy = _generated(layout, "com.acme.GreetingProvider").read_text()
        assert "\nfinal class GreetingProvider implements" in lazy

    def test_custom_extension(self, layout, context):
        write_resource(layout["src"], "com.acme.Legal", "md", "# Terms")
        d = MarkedDeclaration("com.acme.Legal", binding=ResourceBinding(file_extension="md"))
        report = generate([d], context)
        assert report.ok
        lazy = _generated(layout, "com.acme.LegalProvider").read_text()
        assert '"Legal.md"' in lazy


class TestNormalization:
    def test_collapses_runs(self):
        assert normalize_space("a \t\n\n  b\r\nc") == "a b c"

    def test_keeps_edges_as_single_space(self):
        assert normalize_space("\n  a  \n") == " a "

    def test_disabled_preserves_text(self, layout, context):
        text = "line one\n\tline  two\r\n"
        write_resource(layout["src"], "com.acme.Raw", "txt", text)
        d = MarkedDeclaration("com.acme.Raw", binding=ResourceBinding(normalize_space=False))
        generate([d], context)
        embedded = _generated(layout, "com.acme.RawProviderJ2cl").read_text()
        assert 'return "line one\\n\\tline  two\\r\\n";' in embedded

    def test_lazy_provider_never_embeds_text(self, layout, context):
        write_resource(layout["src"], "com.acme.Greeting", "txt", "Hello\n  World")
        generate([GREETING], context)
        lazy = _generated(layout, "com.acme.GreetingProvider").read_text()
        assert "Hello" not in lazy


class TestIdempotence:
    def test_second_run_writes_nothing(self, layout, context):
        write_resource(layout["src"], "com.acme.Greeting", "txt", "Hello")
        first = generate([GREETING], context)
        assert len(first.written) == 2

        rerun = GenerationContext.for_layout([layout["src"]], [layout["classes"]], layout["out"])
        spy = _spy_resolver(rerun)
        second = generate([GREETING], rerun)

        assert second.ok
        assert second.written == []
        assert second.skipped == ["com.acme.GreetingProvider", "com.acme.GreetingProviderJ2cl"]
        assert spy.resolve.call_count == 0

    def test_same_context_twice(self, layout, context):
        write_resource(layout["src"], "com.acme.Greeting", "txt", "Hello")
        generate([GREETING], context)
        spy = _spy_resolver(context)
        report = generate([GREETING], context)
        assert report.written == []
        assert spy.resolve.call_count == 0

    def test_only_missing_target_generated(self, layout, context):
        write_resource(layout["src"], "com.acme.Greeting", "txt", "Hello")
        existing = _generated(layout, "com.acme.GreetingProvider")
        existing.parent.mkdir(parents=True)
        existing.write_text("// hand made")

        report = generate([GREETING], context)

        assert report.skipped == ["com.acme.GreetingProvider"]
        assert report.written == ["com.acme.GreetingProviderJ2cl"]
        assert existing.read_text() == "// hand made"


class TestFallback:
    def test_resource_only_in_compiled_tree(self, layout, context):
        write_resource(layout["classes"], "com.acme.Greeting", "txt", "staged")
        report = generate([GREETING], context)
        assert report.ok
        assert len(report.written) == 2
        assert context.diagnostics.messages == []


class TestErrors:
    def test_empty_extension(self, layout, context):
        write_resource(layout["src"], "com.acme.Greeting", "txt", "Hello")
        d = MarkedDeclaration("com.acme.Greeting", binding=ResourceBinding(file_extension=""))
        spy = _spy_resolver(context)

        report = generate([d], context)

        assert not report.ok
        assert "fileExtension" in report.errors[0]["error"]
        assert spy.resolve.call_count == 0
        assert not any(layout["out"].rglob("*.java"))
        assert len(context.diagnostics.errors()) == 1

    def test_default_package_rejected(self, layout, context):
        report = generate([MarkedDeclaration("Greeting")], context)
        assert "default package" in report.errors[0]["error"]

    def test_missing_resource_reported_and_batch_continues(self, layout, context):
        write_resource(layout["src"], "com.acme.Second", "txt", "two")
        declarations = [MarkedDeclaration("com.acme.First"), MarkedDeclaration("com.acme.Second")]

        report = generate(declarations, context)

        first, second = report.outcomes
        assert "com.acme/First.txt" in first.error
        assert first.written == []
        assert second.ok
        assert second.written == ["com.acme.SecondProvider", "com.acme.SecondProviderJ2cl"]
        errors = context.diagnostics.errors()
        assert len(errors) == 1
        assert errors[0].startswith("com.acme.First:")

    def test_template_error_aborts_batch(self, layout, context):
        write_resource(layout["src"], "com.acme.Greeting", "txt", "Hello")
        with patch("textresource_engine.engine.render", side_effect=TemplateError("gone")):
            with pytest.raises(TemplateError):
                generate([GREETING], context)

    def test_sink_failure_reported(self, layout, context):
        write_resource(layout["src"], "com.acme.Greeting", "txt", "Hello")
        context.sink = MagicMock()
        context.sink.create_source_file.side_effect = WriteError("disk full")

        outcome = process_declaration(GREETING, context)

        assert outcome.error == "disk full"
        assert outcome.written == []
        assert context.registry.written == []

    def test_duplicate_file_is_write_error(self, layout, context):
        context.sink.create_source_file("com.acme.GreetingProvider").close()
        with pytest.raises(WriteError, match="recreate"):
            context.sink.create_source_file("com.acme.GreetingProvider")

    def test_partial_write_discarded(self, layout, context):
        write_resource(layout["src"], "com.acme.Greeting", "txt", "Hello")
        writer = MagicMock()
        writer.__enter__.return_value = writer
        writer.write.side_effect = OSError("no space left")
        real_sink = context.sink
        context.sink = MagicMock(wraps=real_sink)
        context.sink.create_source_file.return_value = writer

        outcome = process_declaration(GREETING, context)

        assert "no space left" in outcome.error
        writer.__exit__.assert_called_once()
        context.sink.discard.assert_called_once_with("com.acme.GreetingProvider")
        assert not context.registry.lookup_declaration("com.acme.GreetingProvider")

    def test_unexpected_error_reported(self, layout, context):
        context.resolver = MagicMock()
        context.resolver.resolve.side_effect = RuntimeError("boom")
        outcome = process_declaration(GREETING, context)
        assert outcome.error == "RuntimeError: boom"
        assert context.diagnostics.errors() == ["com.acme.Greeting: RuntimeError: boom"]


class TestWorkers:
    def test_parallel_matches_input_order(self, layout):
        names = [f"com.acme.Res{i}" for i in range(8)]
        for name in names:
            write_resource(layout["src"], name, "txt", name)
        context = GenerationContext.for_layout(
            [layout["src"]], [layout["classes"]], layout["out"], workers=4,
        )

        report = generate([MarkedDeclaration(n) for n in names], context)

        assert report.ok
        assert [o.name for o in report.outcomes] == names
        assert len(report.written) == 16
        assert len(list(layout["out"].rglob("*.java"))) == 16


class TestReport:
    def test_summary(self, layout, context):
        write_resource(layout["src"], "com.acme.Greeting", "txt", "Hello")
        report = generate([GREETING, MarkedDeclaration("com.acme.Missing")], context)
        summary = report.summary()
        assert "2 declarations, 2 written, 0 skipped" in summary
        assert "+ com.acme.GreetingProviderJ2cl" in summary
        assert "Errors: 1" in summary
        assert "com.acme.Missing" in summary
