"""Text resource provider generator.

For every type marked ``@TextResourceAware`` the engine locates the companion
text resource (``<package>/<Type>.<ext>``) and emits two Java sources:

    <Type>Provider       loads the resource at runtime by name
    <Type>ProviderJ2cl   embeds the resource text as a string literal

Generation is idempotent: a provider that already exists is never rewritten.
"""

__version__ = "0.3.0"

# Suffixes appended to the marked type's name
PROVIDER_SUFFIX = "Provider"
EMBEDDED_SUFFIX = "J2cl"

# Name of the marker annotation recognised by source discovery
ANNOTATION = "TextResourceAware"
