from setuptools import setup, find_packages

setup(
    name="connect4-play",
    version="0.1.0",
    description="Connect Four for two players with a Tkinter window, "
                "configurable board sizes and save/load",
    packages=find_packages(include=["connect4play", "connect4play.*"]),
    python_requires=">=3.8",
    install_requires=[
        "numpy",
        "filelock",  # Locking around the save file
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": [
            "connect4=connect4play.interfaces.cli:main",
        ],
    },
)
