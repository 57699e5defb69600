"""Java source templates for generated providers.

Templates use literal ``$TOKEN`` placeholders rather than str.format()
so generated Java braces need no escaping. Each template is keyed by the
strategy it implements.
"""

from __future__ import annotations

from textresource_engine.errors import TemplateError

RUNTIME_LOADING = "runtime-loading"
EMBEDDED_LITERAL = "embedded-literal"

# ── Lazy-loading provider ─────────────────────────────────────────

RUNTIME_LOADING_TEMPLATE = """\
package $PACKAGE;

import walkingkooka.resource.TextResource;
import walkingkooka.resource.TextResourceException;
import walkingkooka.resource.TextResources;

/**
 * Provides the text of $RESOURCE, bound to {@link $TYPE}.
 * The resource is read from the class path each time it is requested.
 */
@javax.annotation.processing.Generated("textresource-engine")
$VISIBILITYfinal class $NAME implements TextResource {

    public $NAME() {
        super();
    }

    @Override
    public String text() throws TextResourceException {
        return TextResources.classPath("$RESOURCE", $NAME.class).text();
    }

    @Override
    public String toString() {
        return "$RESOURCE";
    }
}
"""

# ── Embedded-literal provider ─────────────────────────────────────

EMBEDDED_LITERAL_TEMPLATE = """\
package $PACKAGE;

import walkingkooka.resource.TextResource;

/**
 * Provides the text of $RESOURCE, bound to {@link $TYPE}.
 * The text was embedded when this source was generated.
 */
@javax.annotation.processing.Generated("textresource-engine")
$VISIBILITYfinal class $NAME implements TextResource {

    public $NAME() {
        super();
    }

    @Override
    public String text() {
        return $TEXT;
    }

    @Override
    public String toString() {
        return "$RESOURCE";
    }
}
"""

TEMPLATES: dict[str, str] = {
    RUNTIME_LOADING: RUNTIME_LOADING_TEMPLATE,
    EMBEDDED_LITERAL: EMBEDDED_LITERAL_TEMPLATE,
}


def load_template(template_id: str) -> str:
    """Return the template text for ``template_id``.

    Raises:
        TemplateError: If no template is registered under that id.
    """
    try:
        return TEMPLATES[template_id]
    except KeyError:
        raise TemplateError(
            f"Template '{template_id}' not found. "
            f"Available: {', '.join(sorted(TEMPLATES))}"
        ) from None
