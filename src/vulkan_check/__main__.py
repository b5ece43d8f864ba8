#!/usr/bin/env python3
"""Vulkan Check - Module entry point."""

from vulkan_check.cli import main

if __name__ == "__main__":
    main()
