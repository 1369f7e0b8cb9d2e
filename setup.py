from setuptools import setup, find_packages

setup(name='callback_future',
      version='0.1.0',
      description='An adaptor between callback-based APIs and pollable, awaitable futures',
      classifiers=[
          "Programming Language :: Python :: 3",
          "License :: OSI Approved :: MIT License",
          "Framework :: Trio",
          "Framework :: AsyncIO",
      ],
      keywords='callback future async trio asyncio',
      license='MIT',
      packages=find_packages(),
      python_requires='>=3.8',
      install_requires=[
          'trio',
          'outcome',
      ],
      extras_require={
          'test': ['pytest'],
      },
)
