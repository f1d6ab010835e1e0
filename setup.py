from setuptools import setup, find_namespace_packages

setup(
    name="depgraph",
    version="0.1.0",
    description="Grafo de dependências de pacotes: ciclos, ordem de build, conflitos e impacto.",
    author="Seu Nome",
    license="GPL-3.0",
    packages=find_namespace_packages(include=["depgraph", "depgraph.*"]),
    python_requires=">=3.8",
    install_requires=[
        "rich>=13.0.0",
    ],
    extras_require={
        "dev": [
            "pytest>=8.3.4",
            "pytest-cov>=2.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "depgraph=depgraph.modules.cli:main",
        ],
    },
)
