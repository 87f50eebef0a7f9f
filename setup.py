from setuptools import setup, find_packages

setup(
    name="zplgen",
    version="1.0.0",
    description="Gerador fluente de documentos ZPL (etiquetas Zebra) com pré-visualização via Flask",
    packages=find_packages(include=["zplgen", "zplgen.*"]),
    package_data={"zplgen": ["zpl_templates/*.zpl.j2"]},
    include_package_data=True,
    python_requires=">=3.9",
    install_requires=[
        "flask>=2.2",
        "jinja2>=3.1",
    ],
    extras_require={
        "test": ["pytest>=7"],
    },
)
