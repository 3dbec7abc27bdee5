from devsetup.steps.defs import NPM_TOOLS, next_steps, steps

__all__ = ["NPM_TOOLS", "next_steps", "steps"]
