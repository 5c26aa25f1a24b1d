"""
ConfigCommand — Show or change project configuration
"""

from ..commands.base import BaseCommand
from ..services.providers import get_provider_status


class ConfigCommand(BaseCommand):

    def show_config(self) -> int:
        """Show current configuration."""
        self.emit(self.config_manager.display())
        self.emit("")
        self.emit(f"Classifier: {get_provider_status(self.config)}")
        error = self.config.validate()
        if error:
            self.logger.warn(error)
            return 1
        return 0

    def set_config(self, key: str, value: str) -> int:
        """Set a project configuration value."""
        error = self.config_manager.set(key, value)
        if error:
            self.logger.error(error)
            return 1
        self.logger.success(f"Set {key} = {value}")
        self.emit(f"Saved to {self.config_manager.project_config_path}")
        return 0


# =============================================================================
# Command Registration (Self-Registration Pattern)
# =============================================================================

def register_parser(subparsers):
    """Register config command parser."""
    p = subparsers.add_parser('config', help='View or set configuration')
    p.add_argument('--set', metavar='KEY=VALUE',
                   help='Set config value (e.g., llm.provider=openai)')
    return p


def handle(cli, args):
    """Handle config command dispatch."""
    command = ConfigCommand(cli)
    if args.set:
        if '=' not in args.set:
            cli.logger.error("Use format KEY=VALUE (e.g., llm.provider=openai)")
            return 1
        key, value = args.set.split('=', 1)
        return command.set_config(key.strip(), value.strip())
    return command.show_config()
