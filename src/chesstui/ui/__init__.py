"""Terminal display: rich renderables and the Qt-driven console loop."""
