from pydantic import BaseModel, Field

from commandeer import *


class Greet(BaseModel):
    name: str = Field(description="Name to greet")
    loud: bool = Field(False, description="Use uppercase")


class Copy(BaseModel):
    verbose: bool = Field(False, description="Show detailed output")


@define_command(descr="Greet someone", options=define_options(Greet, {"n": "name", "l": "loud"}))
def greet(options, args):
    greeting = f"Hello, {options.name}!"
    print(greeting.upper() if options.loud else greeting)


@define_command(
    descr="Copy a file to another location",
    options=define_options(Copy, {"v": "verbose"}),
    args=tuple[str, str],
)
async def copy(options, args):
    source, destination = args
    if options.verbose:
        print(f"Copying {source} to {destination}...")
    print(f"Copied {source} to {destination}")


config = define_config(
    {"greet": greet, "copy": copy},
    meta=Meta("simple-cli", "1.0.0", "A simple example CLI"),
)


if __name__ == '__main__':
    invoke(config)
