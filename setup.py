from setuptools import setup, find_packages

setup(
    name="dna_suffix_tree",
    version="0.1.0",
    description="Exact DNA substring search with a linear-time (Ukkonen) suffix tree.",
    packages=find_packages(where='.', include=['dna_suffix_tree', 'dna_suffix_tree.*']),
    python_requires='>=3.10',
    install_requires=[
        'numpy>=1.20.0'  # sliding_window_view
    ],
    extras_require={
        # benchmark.py only
        'benchmark': [
            'pandas',
            'matplotlib'
        ],
        'test': [
            'pytest'
        ],
    },
    zip_safe=False
)
