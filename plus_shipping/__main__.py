from plus_shipping.main import run

if __name__ == "__main__":
    run()
