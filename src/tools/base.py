# src/tools/base.py
from abc import ABC, abstractmethod


class SecurityToolAdapter(ABC):
    @abstractmethod
    def build_command(self, target, options):
        """Return the tool command for a target, or None when there is nothing to scan."""
        pass

    @abstractmethod
    def parse_output(self, output: str):
        pass
