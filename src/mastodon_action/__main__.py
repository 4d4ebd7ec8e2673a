from mastodon_action.cli import main

main()
