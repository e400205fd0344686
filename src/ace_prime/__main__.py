from ace_prime.clients import disc


if __name__ == "__main__":
    disc.run()
