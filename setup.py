import setuptools

with open("README.md") as fh:
    long_description = fh.read()

setuptools.setup(
    name="text_to_svg",
    version="0.1.0",
    author="Shay Hill",
    author_email="shay_public@hotmail.com",
    description="Convert text to svg path elements with an outline font.",
    long_description=long_description,
    long_description_content_type="text/markdown",
    url="https://github.com/ShayHill/text_to_svg",
    package_dir={"": "src"},
    package_data={"text_to_svg": ["py.typed", "fonts/*.ttf", "fonts/OFL.txt"]},
    packages=setuptools.find_packages(where="src"),
    install_requires=[
        "fonttools",
        "lxml",
        "paragraphs",
        "svg-path-data",
        "typing_extensions",
    ],
    extras_require={"test": ["pytest"]},
    python_requires=">=3.10",
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
    ],
)
