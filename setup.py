from setuptools import setup, find_packages
import re

# Read version from trpayroll/__init__.py
with open('trpayroll/__init__.py') as f:
    version = re.search(r'^__version__ = ["\']([^"\']+)["\']', f.read(), re.MULTILINE).group(1)

setup(
    name='tr-payroll',
    version=version,
    packages=find_packages(include=['trpayroll', 'trpayroll.*']),
    package_data={
        'trpayroll.sdk': ['fiscal_params/*.yaml'],
    },
    install_requires=[
        'PyYAML>=6.0',
        'click>=8.0',
        'mcp[cli]>=1.2.0,<2',
        'pydantic>=2.0.0',
        'httpx>=0.25',
    ],
    extras_require={
        'test': [
            'pytest>=7.0',
        ],
    },
    entry_points={
        'console_scripts': [
            'tr-payroll=trpayroll.cli.__main__:main',
            'tr-payroll-mcp=trpayroll.mcp.server:run_server',
        ],
    },
    author='Personal',
    description='Turkish payroll calculations and budget simulations as MCP tools.',
    python_requires='>=3.10',
)
