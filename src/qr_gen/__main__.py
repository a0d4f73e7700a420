from .cli import encode_main

if __name__ == "__main__":
    encode_main()
