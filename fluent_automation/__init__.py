"""
================================================================================
Fluent Automation
================================================================================

Fluent browser test DSL: commands ("click", "select", "enter") and
expectations ("expect text", "expect count") against a live document.

Packages:
    - framework: command core, expectation engine, Playwright adapter
    - common: shared configuration and logging

Example:
    from fluent_automation.framework.browser_manager import bootstrap

    manager, I = bootstrap("chrome")
    try:
        I.open("http://localhost:3000/forms")
        I.select("Motorcycles").from_("select.product")
        I.expect.text("motorcycles").in_("select.product")
    finally:
        manager.close()

================================================================================
"""

__version__ = "1.0.0"

__all__ = [
    "common",
    "framework",
]
