from dataclasses import dataclass

from systemd_bot.config import Config
from systemd_bot.core.controller import ServiceController
from systemd_bot.monitor.process import ProcessMonitor
from systemd_bot.storage.sessions import SessionStore


@dataclass
class AppContext:
    """Everything the handlers share; built once before polling starts."""

    config:     Config
    sessions:   SessionStore
    controller: ServiceController
    monitor:    ProcessMonitor

    @property
    def services(self):
        return self.config.controllable_services

    def is_controllable(self, name):
        return name in self.config.controllable_services


def build_context(config: Config) -> AppContext:
    return AppContext(
        config=config,
        sessions=SessionStore(config.available_ids),
        controller=ServiceController(use_sudo=config.use_sudo,
                                     timeout=config.service_timeout),
        monitor=ProcessMonitor(),
    )
