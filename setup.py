# SPDX-License-Identifier: GPL-3.0-or-later
from setuptools import setup, find_namespace_packages


def get_description():
    return "Publishing tools for Google Cloud images"


def get_long_description():
    with open("README.md") as f:
        text = f.read()

    # Long description is everything after README's initial heading
    idx = text.find("\n\n")
    return text[idx:]


def get_requirements():
    with open("requirements.txt") as f:
        return f.read().splitlines()


setup(
    name="pubtools-gcloud",
    version="1.0.0",
    packages=find_namespace_packages(where="src"),
    package_dir={"": "src"},
    license="GPLv3+",
    description=get_description(),
    long_description=get_long_description(),
    long_description_content_type="text/markdown",
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: GNU General Public License v3 or later (GPLv3+)",
        'Programming Language :: Python :: 3.8',
        'Programming Language :: Python :: 3.9',
        'Programming Language :: Python :: 3.10',
        'Programming Language :: Python :: 3.11',
        "Topic :: Software Development :: Libraries :: Python Modules",
    ],
    install_requires=get_requirements(),
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": [
            "pubtools-gcloud-delete-images = pubtools._gcloud.tasks.delete_images:entry_point",
        ]
    },
    zip_safe=False,
)
