from skybird.game import main


if __name__ == "__main__":
    main()
